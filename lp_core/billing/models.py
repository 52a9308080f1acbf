# lp_core/billing/models.py
from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.utils import timezone

from lp_core.cases.models import Case
from lp_core.common.models import UUIDModel


class InvoiceStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    PAID = "PAID", "Paid"
    OVERDUE = "OVERDUE", "Overdue"


class Invoice(UUIDModel):
    """
    Invoice generated from a tariff selection for a case.
    Totals are snapshots written by InvoiceService together with the items.
    """
    case = models.ForeignKey(Case, on_delete=models.PROTECT, related_name="invoices")

    invoice_number = models.CharField(max_length=32, unique=True)
    date = models.DateField(default=timezone.localdate)
    status = models.CharField(max_length=16, choices=InvoiceStatus.choices, default=InvoiceStatus.PENDING, db_index=True)

    currency = models.CharField(max_length=8, default="ZAR")

    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    vat_rate = models.DecimalField(max_digits=5, decimal_places=4, default=Decimal("0.1500"))  # e.g. 0.1500
    vat_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))  # grand total

    notes = models.TextField(blank=True)

    class Meta:
        db_table = "billing_invoice"
        indexes = [
            models.Index(fields=["case", "created_at"]),
            models.Index(fields=["status", "date"]),
        ]

    def __str__(self) -> str:
        return self.invoice_number


class InvoiceItem(UUIDModel):
    """
    Snapshot of one finalized tariff line. position keeps catalog order.
    """
    invoice = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name="items")

    position = models.PositiveIntegerField(default=0)
    tariff_code = models.CharField(max_length=64, blank=True)
    description = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        db_table = "billing_invoice_item"
        ordering = ["position"]
        indexes = [
            models.Index(fields=["invoice", "position"]),
        ]
