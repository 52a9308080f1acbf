# lp_core/cases/models.py
from __future__ import annotations

from django.db import models
from django.utils import timezone

from lp_core.clients.models import Client
from lp_core.common.models import UUIDModel
from lp_core.tariffs.catalog import BillingContext
from lp_core.tariffs.constants import CourtType


class CaseStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    PENDING = "PENDING", "Pending"
    CLOSED = "CLOSED", "Closed"


class Case(UUIDModel):
    """
    A matter run for a client. court/scale/file_pages are the billing
    context the tariff catalog is resolved from; scale is stored in the
    canonical form produced by the tariff engine (see CaseService).
    """
    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name="cases")

    case_number = models.CharField(max_length=64, unique=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    court = models.CharField(max_length=16, choices=CourtType.choices, default=CourtType.MAGISTRATE)
    scale = models.CharField(max_length=16)
    file_pages = models.PositiveIntegerField(default=0)
    file_date = models.DateField(default=timezone.localdate)

    status = models.CharField(max_length=16, choices=CaseStatus.choices, default=CaseStatus.ACTIVE, db_index=True)

    class Meta:
        db_table = "cases_case"
        indexes = [
            models.Index(fields=["client", "created_at"]),
            models.Index(fields=["status", "created_at"]),
        ]

    def __str__(self) -> str:
        return f"{self.case_number} {self.title}"

    def billing_context(self) -> BillingContext:
        return BillingContext.parse(self.court, self.scale, self.file_pages)
