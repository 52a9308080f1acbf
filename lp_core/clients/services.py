# lp_core/clients/services.py
from __future__ import annotations

import logging
from uuid import UUID

from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from lp_core.clients.models import Client

logger = logging.getLogger(__name__)


class ClientService:
    @staticmethod
    @transaction.atomic
    def create_client(
        *,
        name: str,
        email: str,
        phone: str = "",
        address: str = "",
    ) -> Client:
        try:
            with transaction.atomic():
                client = Client.objects.create(
                    name=name,
                    email=email,
                    phone=phone or "",
                    address=address or "",
                )
        except IntegrityError:
            # email uniqueness is enforced by constraint; surface readable error.
            raise ValidationError({"email": "A client with this email already exists."})

        logger.info("Client created id=%s", client.id)
        return client

    @staticmethod
    @transaction.atomic
    def update_client(*, client_id: UUID, data: dict) -> Client:
        client = Client.objects.select_for_update().get(id=client_id)

        allowed = {"name", "email", "phone", "address"}
        updates = {k: v for k, v in (data or {}).items() if k in allowed}

        for k, v in updates.items():
            setattr(client, k, v)

        try:
            with transaction.atomic():
                client.save()
        except IntegrityError:
            raise ValidationError({"email": "A client with this email already exists."})

        logger.info("Client updated id=%s fields=%s", client.id, sorted(updates))
        return client
