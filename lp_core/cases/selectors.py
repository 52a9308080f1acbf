# lp_core/cases/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet

from lp_core.cases.models import Case


def get_case(*, case_id: UUID) -> Case:
    return Case.objects.select_related("client").get(id=case_id)


def cases_filtered(
    *,
    client_id: UUID | None = None,
    status: str | None = None,
    q: str | None = None,
) -> QuerySet[Case]:
    qs = Case.objects.select_related("client").order_by("-created_at")

    if client_id:
        qs = qs.filter(client_id=client_id)

    if status:
        qs = qs.filter(status=status)

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(Q(case_number__icontains=qv) | Q(title__icontains=qv) | Q(client__name__icontains=qv))

    return qs
