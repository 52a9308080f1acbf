# lp_core/cases/services.py
from __future__ import annotations

import logging
from uuid import UUID

from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from lp_core.cases.models import Case, CaseStatus
from lp_core.clients.models import Client
from lp_core.tariffs.catalog import BillingContext

logger = logging.getLogger(__name__)


class CaseService:
    @staticmethod
    def _ensure_status(status: str) -> None:
        if status not in CaseStatus.values:
            raise ValidationError({"status": f"Must be one of {', '.join(CaseStatus.values)}."})

    @staticmethod
    @transaction.atomic
    def create_case(
        *,
        client_id: UUID,
        case_number: str,
        title: str,
        court: str,
        scale: str,
        file_pages: int = 0,
        description: str = "",
        file_date=None,
        status: str = CaseStatus.ACTIVE,
    ) -> Case:
        # raises InvalidCourtTypeError / InvalidScaleError / InvalidPageCountError
        ctx = BillingContext.parse(court, scale, file_pages)
        CaseService._ensure_status(status)

        if not Client.objects.filter(id=client_id).exists():
            raise ValidationError({"client": "Client not found."})

        fields = {
            "client_id": client_id,
            "case_number": case_number,
            "title": title,
            "description": description or "",
            "court": ctx.court_type,
            "scale": ctx.scale,
            "file_pages": ctx.file_pages,
            "status": status,
        }
        if file_date is not None:
            fields["file_date"] = file_date

        try:
            with transaction.atomic():
                case = Case.objects.create(**fields)
        except IntegrityError:
            raise ValidationError({"case_number": "Case number already exists."})

        logger.info("Case created id=%s number=%s court=%s scale=%s", case.id, case.case_number, case.court, case.scale)
        return case

    @staticmethod
    @transaction.atomic
    def update_case(*, case_id: UUID, data: dict) -> Case:
        case = Case.objects.select_for_update().get(id=case_id)

        allowed = {"case_number", "title", "description", "court", "scale", "file_pages", "file_date", "status"}
        updates = {k: v for k, v in (data or {}).items() if k in allowed}

        if {"court", "scale", "file_pages"} & updates.keys():
            ctx = BillingContext.parse(
                updates.get("court", case.court),
                updates.get("scale", case.scale),
                updates.get("file_pages", case.file_pages),
            )
            updates.update(court=ctx.court_type, scale=ctx.scale, file_pages=ctx.file_pages)

        if "status" in updates:
            CaseService._ensure_status(updates["status"])

        for k, v in updates.items():
            setattr(case, k, v)

        try:
            with transaction.atomic():
                case.save()
        except IntegrityError:
            raise ValidationError({"case_number": "Case number already exists."})

        logger.info("Case updated id=%s fields=%s", case.id, sorted(updates))
        return case
