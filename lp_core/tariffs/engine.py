# lp_core/tariffs/engine.py
"""
Line-item selection + invoice totals.

TariffSheet is the single owner of an in-progress selection: every edit
returns a new sheet with the touched item passed through recompute(), so
an item's total never lags behind its rate/quantity.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping

from rest_framework.exceptions import ValidationError

from lp_core.tariffs.catalog import BillingContext, TariffItem, recompute, resolve_context
from lp_core.tariffs.conf import get_vat_rate
from lp_core.tariffs.constants import MAX_QUANTITY
from lp_core.tariffs.errors import EmptySelectionError, NotFoundError
from lp_core.tariffs.money import MAX_AMOUNT, ZERO, round2, to_decimal


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    vat: Decimal
    total: Decimal


@dataclass(frozen=True)
class InvoiceLineDraft:
    code: str
    description: str
    quantity: int
    unit_price: Decimal
    total: Decimal

    @classmethod
    def from_item(cls, item: TariffItem) -> "InvoiceLineDraft":
        return cls(
            code=item.id,
            description=item.description,
            quantity=item.quantity,
            unit_price=item.rate,
            total=item.total_amount,
        )


def compute_totals(items: Iterable[TariffItem], *, vat_rate=None) -> InvoiceTotals:
    """
    subtotal = sum of selected line totals; VAT is rounded once, on the subtotal,
    so subtotal + vat always equals round2(subtotal * (1 + vat_rate)).
    """
    rate = get_vat_rate() if vat_rate is None else to_decimal(vat_rate, "vat_rate")
    subtotal = round2(sum((i.total_amount for i in items if i.selected), ZERO))
    vat = round2(subtotal * rate)
    total = round2(subtotal + vat)
    if total > MAX_AMOUNT:
        raise ValidationError({"total": f"Invoice total must not exceed {MAX_AMOUNT}."})
    return InvoiceTotals(subtotal=subtotal, vat=vat, total=total)


def finalize(items: Iterable[TariffItem]) -> tuple[InvoiceLineDraft, ...]:
    lines = tuple(InvoiceLineDraft.from_item(i) for i in items if i.selected)
    if not lines:
        raise EmptySelectionError()
    return lines


def _field(line, name: str):
    # saved lines arrive as dicts (API payloads) or model rows
    if isinstance(line, Mapping):
        return line.get(name)
    return getattr(line, name)


def _whole_quantity(value) -> int:
    q = to_decimal(value, "quantity")
    if q != q.to_integral_value():
        raise ValidationError({"quantity": "Quantity must be a whole number."})
    if q > MAX_QUANTITY:
        raise ValidationError({"quantity": f"Quantity must not exceed {MAX_QUANTITY}."})
    return int(q)


@dataclass(frozen=True)
class TariffSheet:
    context: BillingContext
    items: tuple[TariffItem, ...]

    @classmethod
    def for_context(cls, court_type, scale, file_pages, *, tables=None) -> "TariffSheet":
        context = BillingContext.parse(court_type, scale, file_pages, tables=tables)
        return cls.from_context(context, tables=tables)

    @classmethod
    def from_context(cls, context: BillingContext, *, tables=None) -> "TariffSheet":
        return cls(context=context, items=resolve_context(context, tables=tables))

    # -----------------------
    # Lookup
    # -----------------------
    def _index_of(self, item_id: str) -> int:
        for idx, item in enumerate(self.items):
            if item.id == item_id:
                return idx
        raise NotFoundError(item_id=item_id)

    def get(self, item_id: str) -> TariffItem:
        return self.items[self._index_of(item_id)]

    @property
    def selected_items(self) -> tuple[TariffItem, ...]:
        return tuple(i for i in self.items if i.selected)

    def search(self, term: str | None) -> tuple[TariffItem, ...]:
        needle = (term or "").strip().lower()
        if not needle:
            return self.items
        return tuple(i for i in self.items if needle in i.description.lower() or needle in i.id.lower())

    # -----------------------
    # Transitions
    # -----------------------
    def _update(self, item_id: str, change: Callable[[TariffItem], TariffItem]) -> "TariffSheet":
        idx = self._index_of(item_id)
        items = list(self.items)
        items[idx] = recompute(change(items[idx]))
        return replace(self, items=tuple(items))

    def toggle_selected(self, item_id: str) -> "TariffSheet":
        return self._update(item_id, lambda i: replace(i, selected=not i.selected))

    def select(self, *item_ids: str) -> "TariffSheet":
        sheet = self
        for item_id in item_ids:
            sheet = sheet._update(item_id, lambda i: replace(i, selected=True))
        return sheet

    def set_quantity(self, item_id: str, quantity) -> "TariffSheet":
        # below 1 is coerced up, not rejected
        qty = max(_whole_quantity(quantity), 1)
        return self._update(item_id, lambda i: replace(i, quantity=qty))

    def set_rate(self, item_id: str, rate) -> "TariffSheet":
        # negative is coerced to 0, not rejected
        new_rate = round2(max(to_decimal(rate, "rate"), ZERO))
        return self._update(item_id, lambda i: replace(i, rate=new_rate))

    def apply_selections(self, selections: Iterable[Mapping[str, Any]]) -> "TariffSheet":
        """
        selections: [{"id": ..., "quantity"?: ..., "rate"?: ...}, ...]
        Each listed id ends up selected; optional fields are edited after.
        """
        sheet = self
        for sel in selections:
            item_id = sel["id"]
            sheet = sheet.select(item_id)
            if sel.get("quantity") is not None:
                sheet = sheet.set_quantity(item_id, sel["quantity"])
            if sel.get("rate") is not None:
                sheet = sheet.set_rate(item_id, sel["rate"])
        return sheet

    def apply_invoice_lines(self, lines: Iterable[Any]) -> "TariffSheet":
        """
        Re-open a saved invoice for editing: catalog items whose description
        matches a saved line become selected with the saved quantity/unit price.
        Totals are recomputed, never copied from the saved line.
        """
        by_description = {i.description: i.id for i in self.items}
        sheet = self
        for line in lines:
            item_id = by_description.get(_field(line, "description"))
            if item_id is None:
                continue
            sheet = (
                sheet.select(item_id)
                .set_quantity(item_id, _field(line, "quantity"))
                .set_rate(item_id, _field(line, "unit_price"))
            )
        return sheet

    # -----------------------
    # Output
    # -----------------------
    def totals(self, *, vat_rate=None) -> InvoiceTotals:
        return compute_totals(self.items, vat_rate=vat_rate)

    def finalize(self) -> tuple[InvoiceLineDraft, ...]:
        return finalize(self.items)
