# lp_core/billing/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from lp_core.billing.models import Invoice


def get_invoice(*, invoice_id: UUID) -> Invoice:
    return Invoice.objects.select_related("case", "case__client").prefetch_related("items").get(id=invoice_id)


def invoices_filtered(
    *,
    case_id: UUID | None = None,
    status: str | None = None,
) -> QuerySet[Invoice]:
    qs = (
        Invoice.objects.select_related("case", "case__client")
        .prefetch_related("items")
        .order_by("-date", "-created_at")
    )

    if case_id:
        qs = qs.filter(case_id=case_id)

    if status:
        qs = qs.filter(status=status)

    return qs


def recent_invoices(*, limit: int = 5) -> QuerySet[Invoice]:
    return invoices_filtered().order_by("-created_at")[:limit]
