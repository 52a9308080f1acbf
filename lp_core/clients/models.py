# lp_core/clients/models.py
from django.db import models

from lp_core.common.models import UUIDModel


class Client(UUIDModel):
    """
    A person or organisation the practice acts for.
    """
    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=32, blank=True)
    address = models.TextField(blank=True)

    class Meta:
        db_table = "clients_client"
        indexes = [
            models.Index(fields=["name"]),
        ]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
