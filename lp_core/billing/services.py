# lp_core/billing/services.py
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping
from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import ValidationError

from lp_core.billing.models import Invoice, InvoiceItem, InvoiceStatus
from lp_core.cases.models import Case
from lp_core.tariffs.conf import get_vat_rate
from lp_core.tariffs.engine import TariffSheet

logger = logging.getLogger(__name__)


class InvoiceService:
    @staticmethod
    def _ensure_status(status: str) -> None:
        if status not in InvoiceStatus.values:
            raise ValidationError({"status": f"Must be one of {', '.join(InvoiceStatus.values)}."})

    @staticmethod
    def _ensure_editable(invoice: Invoice) -> None:
        if invoice.status == InvoiceStatus.PAID:
            raise ValidationError({"invoice": "Paid invoices cannot be changed."})

    @staticmethod
    def _next_invoice_number_locked() -> str:
        latest = (
            Invoice.objects.select_for_update()
            .filter(invoice_number__regex=r"^INV-\d{6}$")
            .order_by("-invoice_number")
            .first()
        )

        if not latest:
            return "INV-000001"

        n = int(latest.invoice_number[len("INV-"):]) + 1
        return f"INV-{n:06d}"

    @staticmethod
    def _write_items(invoice: Invoice, sheet: TariffSheet) -> None:
        """
        Replace the invoice's items + totals with the sheet's finalized selection.
        Raises EmptySelectionError before anything is touched.
        """
        lines = sheet.finalize()
        totals = sheet.totals(vat_rate=invoice.vat_rate)

        InvoiceItem.objects.filter(invoice=invoice).delete()
        InvoiceItem.objects.bulk_create(
            [
                InvoiceItem(
                    invoice=invoice,
                    position=pos,
                    tariff_code=line.code,
                    description=line.description,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    total=line.total,
                )
                for pos, line in enumerate(lines)
            ]
        )

        invoice.subtotal = totals.subtotal
        invoice.vat_total = totals.vat
        invoice.amount = totals.total

    @staticmethod
    def build_sheet(*, case: Case, selections: Iterable[Mapping[str, Any]]) -> TariffSheet:
        return TariffSheet.from_context(case.billing_context()).apply_selections(selections)

    @staticmethod
    @transaction.atomic
    def create_from_selection(
        *,
        case_id: UUID,
        selections: Iterable[Mapping[str, Any]],
        date=None,
        status: str = InvoiceStatus.PENDING,
        notes: str = "",
    ) -> Invoice:
        """
        Resolve the case's catalog, apply the selections, persist invoice + items.

        selections: [{"id": <tariff code>, "quantity"?: int, "rate"?: Decimal}, ...]
        """
        InvoiceService._ensure_status(status)
        case = Case.objects.get(id=case_id)

        # validate before taking a number
        sheet = InvoiceService.build_sheet(case=case, selections=selections)
        sheet.finalize()

        invoice = Invoice(
            case=case,
            invoice_number=InvoiceService._next_invoice_number_locked(),
            status=status,
            vat_rate=get_vat_rate(),
            notes=notes or "",
        )
        if date is not None:
            invoice.date = date
        invoice.save()

        InvoiceService._write_items(invoice, sheet)
        invoice.save(update_fields=["subtotal", "vat_total", "amount", "updated_at"])

        logger.info(
            "Invoice created number=%s case=%s lines=%d amount=%s",
            invoice.invoice_number,
            case.id,
            len(sheet.selected_items),
            invoice.amount,
        )
        return invoice

    @staticmethod
    @transaction.atomic
    def update_from_selection(
        *,
        invoice_id: UUID,
        selections: Iterable[Mapping[str, Any]],
    ) -> Invoice:
        invoice = Invoice.objects.select_for_update().select_related("case").get(id=invoice_id)
        InvoiceService._ensure_editable(invoice)

        sheet = InvoiceService.build_sheet(case=invoice.case, selections=selections)
        InvoiceService._write_items(invoice, sheet)
        invoice.save(update_fields=["subtotal", "vat_total", "amount", "updated_at"])

        logger.info("Invoice regenerated number=%s amount=%s", invoice.invoice_number, invoice.amount)
        return invoice

    @staticmethod
    def selection_sheet(*, invoice_id: UUID) -> TariffSheet:
        """
        Case catalog with the invoice's saved lines re-applied (edit flow).
        """
        invoice = Invoice.objects.select_related("case").get(id=invoice_id)
        sheet = TariffSheet.from_context(invoice.case.billing_context())
        return sheet.apply_invoice_lines(invoice.items.order_by("position"))

    @staticmethod
    @transaction.atomic
    def set_status(*, invoice_id: UUID, status: str) -> Invoice:
        InvoiceService._ensure_status(status)
        invoice = Invoice.objects.select_for_update().get(id=invoice_id)

        previous = invoice.status
        invoice.status = status
        invoice.save(update_fields=["status", "updated_at"])

        logger.info("Invoice status number=%s %s -> %s", invoice.invoice_number, previous, status)
        return invoice

    @staticmethod
    @transaction.atomic
    def delete(*, invoice_id: UUID) -> None:
        invoice = Invoice.objects.select_for_update().get(id=invoice_id)
        number = invoice.invoice_number
        # items cascade
        invoice.delete()
        logger.info("Invoice deleted number=%s", number)
