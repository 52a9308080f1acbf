# lp_core/clients/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet

from lp_core.clients.models import Client


def get_client(*, client_id: UUID) -> Client:
    return Client.objects.get(id=client_id)


def search_clients(*, q: str | None = None) -> QuerySet[Client]:
    qs = Client.objects.all()

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(Q(name__icontains=qv) | Q(email__icontains=qv) | Q(phone__icontains=qv))

    return qs.order_by("name", "-created_at")
