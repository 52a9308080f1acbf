# lp_core/tariffs/tests/test_engine.py
from decimal import Decimal

import pytest
from rest_framework.exceptions import ValidationError

from lp_core.tariffs.catalog import BillingContext, TariffItem
from lp_core.tariffs.constants import MAX_QUANTITY
from lp_core.tariffs.engine import InvoiceLineDraft, TariffSheet, compute_totals, finalize
from lp_core.tariffs.errors import EmptySelectionError, NotFoundError
from lp_core.tariffs.money import round2


def _item(item_id, total, selected=True):
    return TariffItem(
        id=item_id,
        description=f"Item {item_id}",
        unit="Each",
        rate=Decimal(total),
        quantity=1,
        total_amount=Decimal(total),
        selected=selected,
    )


@pytest.fixture
def sheet():
    return TariffSheet.for_context("magistrate", "B", 10)


def test_totals_with_default_vat():
    totals = compute_totals([_item("a", "100.00"), _item("b", "250.00")])

    assert totals.subtotal == Decimal("350.00")
    assert totals.vat == Decimal("52.50")
    assert totals.total == Decimal("402.50")


def test_totals_ignore_unselected_items():
    totals = compute_totals([_item("a", "100.00"), _item("b", "250.00", selected=False)])
    assert totals.subtotal == Decimal("100.00")


def test_totals_with_nothing_selected_are_zero():
    totals = compute_totals([_item("a", "100.00", selected=False)])
    assert (totals.subtotal, totals.vat, totals.total) == (Decimal("0.00"),) * 3


def test_vat_rate_override_argument():
    totals = compute_totals([_item("a", "100.00")], vat_rate="0.14")
    assert totals.vat == Decimal("14.00")
    assert totals.total == Decimal("114.00")


def test_vat_rate_from_settings(settings):
    settings.TARIFFS = {"VAT_RATE": "0.10"}
    totals = compute_totals([_item("a", "99.99")])
    # 9.999 -> 10.00
    assert totals.vat == Decimal("10.00")
    assert totals.total == Decimal("109.99")


def test_finalize_requires_a_selection():
    with pytest.raises(EmptySelectionError):
        finalize([_item("a", "1.00", selected=False)])


def test_finalize_keeps_catalog_order(sheet):
    lines = sheet.select("Part II - 03", "Part I - 07").finalize()
    assert [line.code for line in lines] == ["Part I - 07", "Part II - 03"]
    assert lines[0] == InvoiceLineDraft(
        code="Part I - 07",
        description="Filing of documents at court",
        quantity=1,
        unit_price=Decimal("36.50"),
        total=Decimal("36.50"),
    )


def test_transitions_return_a_new_sheet(sheet):
    toggled = sheet.toggle_selected("Part I - 07")

    assert toggled.get("Part I - 07").selected is True
    assert sheet.get("Part I - 07").selected is False
    assert toggled.toggle_selected("Part I - 07").get("Part I - 07").selected is False


def test_set_quantity_recomputes_total(sheet):
    updated = sheet.set_quantity("Part I - 07", 3)
    item = updated.get("Part I - 07")
    assert item.quantity == 3
    assert item.total_amount == Decimal("109.50")


@pytest.mark.parametrize("qty", [0, -5])
def test_set_quantity_below_one_is_clamped(sheet, qty):
    item = sheet.set_quantity("Part I - 07", qty).get("Part I - 07")
    assert item.quantity == 1
    assert item.total_amount == Decimal("36.50")


def test_set_quantity_rejects_fractions(sheet):
    with pytest.raises(ValidationError):
        sheet.set_quantity("Part I - 07", "1.5")


def test_set_rate_recomputes_and_clamps(sheet):
    item = sheet.set_rate("Part I - 11", "15.005").get("Part I - 11")
    assert item.rate == Decimal("15.01")
    assert item.total_amount == Decimal("150.10")

    item = sheet.set_rate("Part I - 11", "-3").get("Part I - 11")
    assert item.rate == Decimal("0.00")
    assert item.total_amount == Decimal("0.00")


def test_set_rate_rejects_garbage(sheet):
    with pytest.raises(ValidationError):
        sheet.set_rate("Part I - 11", "abc")


def test_unknown_item_id(sheet):
    with pytest.raises(NotFoundError):
        sheet.toggle_selected("Part IX - 99")
    with pytest.raises(NotFoundError):
        sheet.set_quantity("Part IX - 99", 2)


def test_apply_selections(sheet):
    sheet = sheet.apply_selections(
        [
            {"id": "Part II - 02"},
            {"id": "Part I - 11(b)", "quantity": 20},
            {"id": "Part I - 07", "rate": Decimal("40.00"), "quantity": None},
        ]
    )

    assert [i.id for i in sheet.selected_items] == ["Part I - 07", "Part I - 11(b)", "Part II - 02"]
    assert sheet.get("Part I - 11(b)").total_amount == Decimal("80.00")
    assert sheet.get("Part I - 07").total_amount == Decimal("40.00")

    totals = sheet.totals()
    assert totals.subtotal == Decimal("1060.00")
    assert totals.vat == Decimal("159.00")
    assert totals.total == Decimal("1219.00")


def test_apply_invoice_lines_matches_on_description(sheet):
    lines = [
        {"description": "Judgment", "quantity": 2, "unit_price": "200.00", "total": "999.99"},
        {"description": "Something no longer on the tariff", "quantity": 1, "unit_price": "1.00"},
    ]
    reopened = sheet.apply_invoice_lines(lines)

    item = reopened.get("Part II - 03")
    assert item.selected is True
    assert item.quantity == 2
    assert item.rate == Decimal("200.00")
    # recomputed, not copied
    assert item.total_amount == Decimal("400.00")
    assert len(reopened.selected_items) == 1


def test_search(sheet):
    assert [i.id for i in sheet.search("judg")] == ["Part II - 03"]
    assert [i.id for i in sheet.search("part i - 11")] == ["Part I - 11", "Part I - 11(b)"]
    assert sheet.search("") == sheet.items
    assert sheet.search(None) == sheet.items


def test_from_context_matches_for_context():
    ctx = BillingContext.parse("high", "general", 4)
    assert TariffSheet.from_context(ctx) == TariffSheet.for_context("high", "GENERAL", 4)


def test_set_quantity_above_limit_is_rejected(sheet):
    with pytest.raises(ValidationError) as exc:
        sheet.set_quantity("Part I - 07", MAX_QUANTITY + 1)
    assert "quantity" in exc.value.detail

    assert sheet.set_quantity("Part I - 07", MAX_QUANTITY).get("Part I - 07").quantity == MAX_QUANTITY


def test_round2_out_of_context_range():
    with pytest.raises(ValidationError):
        round2(Decimal("1e40"))


def test_totals_above_storable_amount_are_rejected():
    with pytest.raises(ValidationError) as exc:
        compute_totals([_item("a", "9999999999.99")])
    assert "total" in exc.value.detail
