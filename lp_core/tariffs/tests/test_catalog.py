# lp_core/tariffs/tests/test_catalog.py
from decimal import Decimal

import pytest

from lp_core.tariffs.catalog import BillingContext, normalize_court_type, normalize_scale, resolve_catalog
from lp_core.tariffs.constants import MAX_FILE_PAGES
from lp_core.tariffs.errors import InvalidCourtTypeError, InvalidPageCountError, InvalidScaleError


def _by_id(items):
    return {i.id: i for i in items}


def test_magistrate_scale_b_with_pages():
    items = _by_id(resolve_catalog("magistrate", "B", 10))

    copies = items["Part I - 11(b)"]
    assert copies.rate == Decimal("4.00")
    assert copies.quantity == 10
    assert copies.total_amount == Decimal("40.00")

    perusal = items["Part I - 11"]
    assert perusal.rate == Decimal("14.00")
    assert perusal.total_amount == Decimal("140.00")

    assert items["Part II - 02"].rate == Decimal("940.00")
    assert items["Part II - 02"].quantity == 1


def test_high_court_attorney_without_pages():
    items = _by_id(resolve_catalog("high", "ATTORNEY", 0))

    copies = items["D - 01"]
    assert copies.quantity == 0
    assert copies.total_amount == Decimal("0.00")

    consult = items["A - 01"]
    assert consult.rate == Decimal("120.50")
    assert consult.quantity == 4
    assert consult.total_amount == Decimal("482.00")

    assert items["A - 03"].quantity == 2
    assert items["B - 03"].quantity == 10
    # multiplied rates: base * 1.5
    assert items["B - 01"].rate == Decimal("234.75")
    assert items["B - 02"].rate == Decimal("582.00")


def test_multiplied_rate_is_rounded_half_up_to_cents():
    items = _by_id(resolve_catalog("high", "General", 0))
    # 156.50 * 1.25 = 195.625
    assert items["B - 01"].rate == Decimal("195.63")


def test_magistrate_scale_a_bills_on_d_column():
    a = _by_id(resolve_catalog("magistrate", "A", 3))
    d = _by_id(resolve_catalog("magistrate", "D", 3))
    assert {k: v.rate for k, v in a.items()} == {k: v.rate for k, v in d.items()}


def test_catalog_is_deterministic_and_ordered():
    first = resolve_catalog("magistrate", "C", 5)
    second = resolve_catalog("magistrate", "C", 5)

    assert first == second
    assert [i.id for i in first] == [
        "Part I - 07",
        "Part I - 08",
        "Part I - 11",
        "Part I - 11(b)",
        "Part II - 01",
        "Part II - 02",
        "Part II - 03",
    ]


def test_every_item_starts_unselected_with_consistent_total():
    for court, scale in [("magistrate", "A"), ("high", "candidate")]:
        for item in resolve_catalog(court, scale, 7):
            assert item.selected is False
            assert item.total_amount == (item.rate * item.quantity).quantize(Decimal("0.01"))


@pytest.mark.parametrize(
    "court,scale,expected",
    [
        ("Magistrate Court", "b", ("magistrate", "B")),
        ("  HIGH  ", "Attorney", ("high", "ATTORNEY")),
        ("high court", "candidate  attorney", ("high", "CANDIDATE")),
    ],
)
def test_context_is_normalized(court, scale, expected):
    ctx = BillingContext.parse(court, scale, 0)
    assert (ctx.court_type, ctx.scale) == expected


def test_unknown_scale_is_rejected():
    with pytest.raises(InvalidScaleError) as exc:
        resolve_catalog("magistrate", "Z", 0)
    assert exc.value.allowed == ("A", "B", "C", "D")
    assert exc.value.get_codes() == "invalid_scale"


def test_high_court_scale_on_magistrate_is_rejected():
    with pytest.raises(InvalidScaleError):
        normalize_scale("magistrate", "ATTORNEY")


def test_unknown_court_is_rejected():
    with pytest.raises(InvalidCourtTypeError):
        normalize_court_type("supreme")


@pytest.mark.parametrize("pages", [-1, 2.5, "10", None, True, MAX_FILE_PAGES + 1, 10**27])
def test_invalid_page_count_is_rejected(pages):
    with pytest.raises(InvalidPageCountError):
        resolve_catalog("magistrate", "B", pages)


def test_page_count_upper_bound_is_accepted():
    items = {i.id: i for i in resolve_catalog("magistrate", "B", MAX_FILE_PAGES)}
    assert items["Part I - 11"].quantity == MAX_FILE_PAGES
