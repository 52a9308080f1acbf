# lp_core/tariffs/tables.py
"""
Fee schedules keyed by court type.

Each TariffEntry carries two rules:

- a rate rule, one of:
    Flat(amount)            same rate on every scale
    PerScale({scale: amt})  explicit column per scale
    Multiplied(base)        base * the table's multiplier for the scale
- a quantity rule: a fixed default quantity, or per_page=True to use the
  case's file page count.

Tables are immutable so that resolving a catalog stays a pure function.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from django.core.exceptions import ImproperlyConfigured

from lp_core.tariffs.constants import (
    HALF_HOUR_IN_15_MIN_UNITS,
    ONE_HOUR_IN_15_MIN_UNITS,
    CourtType,
    HighCourtScale,
    MagistrateScale,
)


@dataclass(frozen=True)
class Flat:
    amount: Decimal

    def rate_for(self, scale: str, table: "TariffTable") -> Decimal:
        return self.amount


@dataclass(frozen=True)
class PerScale:
    amounts: Mapping[str, Decimal]

    def rate_for(self, scale: str, table: "TariffTable") -> Decimal:
        try:
            return self.amounts[scale]
        except KeyError:
            raise ImproperlyConfigured(f"No {table.court_type} rate configured for scale {scale!r}.")


@dataclass(frozen=True)
class Multiplied:
    base: Decimal

    def rate_for(self, scale: str, table: "TariffTable") -> Decimal:
        try:
            return self.base * table.multipliers[scale]
        except KeyError:
            raise ImproperlyConfigured(f"No {table.court_type} multiplier configured for scale {scale!r}.")


@dataclass(frozen=True)
class TariffEntry:
    code: str
    description: str
    unit: str
    rate: Flat | PerScale | Multiplied
    quantity: int = 1
    per_page: bool = False

    def default_quantity(self, file_pages: int) -> int:
        return file_pages if self.per_page else self.quantity


@dataclass(frozen=True)
class TariffTable:
    court_type: str
    scales: tuple[str, ...]
    entries: tuple[TariffEntry, ...]
    multipliers: Mapping[str, Decimal] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        codes = [e.code for e in self.entries]
        if len(codes) != len(set(codes)):
            raise ImproperlyConfigured(f"Duplicate tariff codes in {self.court_type} table.")


def _per_scale(**amounts: str) -> PerScale:
    return PerScale(MappingProxyType({k: Decimal(v) for k, v in amounts.items()}))


# Magistrate Court. Column A bills on the D column.
MAGISTRATE_TABLE = TariffTable(
    court_type=CourtType.MAGISTRATE,
    scales=tuple(MagistrateScale.values),
    entries=(
        TariffEntry(
            code="Part I - 07",
            description="Filing of documents at court",
            unit="Per document",
            rate=Flat(Decimal("36.50")),
        ),
        TariffEntry(
            code="Part I - 08",
            description="Necessary attendances",
            unit="Per folio",
            rate=Flat(Decimal("36.50")),
        ),
        TariffEntry(
            code="Part I - 11",
            description="Perusal of document or pleading",
            unit="Per folio",
            rate=Flat(Decimal("14.00")),
            per_page=True,
        ),
        TariffEntry(
            code="Part I - 11(b)",
            description="Attendance, copies",
            unit="Per A4 size",
            rate=_per_scale(A="9.00", B="4.00", C="6.00", D="9.00"),
            per_page=True,
        ),
        TariffEntry(
            code="Part II - 01",
            description="Registered letter of demand",
            unit="Per letter",
            rate=_per_scale(A="72.50", B="52.50", C="52.50", D="72.50"),
        ),
        TariffEntry(
            code="Part II - 02",
            description="Summons (simple), incl. letter of demand",
            unit="Per summons",
            rate=_per_scale(A="1471.00", B="940.00", C="1227.50", D="1471.00"),
        ),
        TariffEntry(
            code="Part II - 03",
            description="Judgment",
            unit="Per judgment",
            rate=_per_scale(A="741.00", B="170.00", C="434.00", D="741.00"),
        ),
    ),
)

_HIGH_COURT_TIME_RATE = _per_scale(GENERAL="188.00", ATTORNEY="120.50", CANDIDATE="80.00")

HIGH_COURT_TABLE = TariffTable(
    court_type=CourtType.HIGH,
    scales=tuple(HighCourtScale.values),
    multipliers=MappingProxyType(
        {
            HighCourtScale.GENERAL: Decimal("1.25"),
            HighCourtScale.ATTORNEY: Decimal("1.5"),
            HighCourtScale.CANDIDATE: Decimal("1.0"),
        }
    ),
    entries=(
        TariffEntry(
            code="A - 01",
            description="Consultation with a client and witnesses to institute or defend an action",
            unit="Per 15 min",
            rate=_HIGH_COURT_TIME_RATE,
            quantity=ONE_HOUR_IN_15_MIN_UNITS,
        ),
        TariffEntry(
            code="A - 03",
            description="Court attendance at proceedings in terms of Rule 37",
            unit="Per 15 min",
            rate=_HIGH_COURT_TIME_RATE,
            quantity=HALF_HOUR_IN_15_MIN_UNITS,
        ),
        TariffEntry(
            code="B - 01",
            description="Formal statement in a matrimonial matter, verifying affidavits",
            unit="Per page",
            rate=Multiplied(Decimal("156.50")),
        ),
        TariffEntry(
            code="B - 02",
            description="Notices (other than formal notice)",
            unit="Per page",
            rate=Multiplied(Decimal("388.00")),
        ),
        TariffEntry(
            code="B - 03",
            description="Letters, including letters electronically transmitted",
            unit="Per page",
            rate=Multiplied(Decimal("156.50")),
            quantity=10,
        ),
        TariffEntry(
            code="C - 01",
            description="Attending the record, entry, perusing, considering, and filing of any pleading",
            unit="Per page",
            rate=Multiplied(Decimal("78.00")),
            per_page=True,
        ),
        TariffEntry(
            code="D - 01",
            description="Making necessary copies, including photocopies, not already provided for",
            unit="Per A4 Page",
            rate=Flat(Decimal("6.00")),
            per_page=True,
        ),
    ),
)

DEFAULT_TABLES: Mapping[str, TariffTable] = MappingProxyType(
    {
        CourtType.MAGISTRATE: MAGISTRATE_TABLE,
        CourtType.HIGH: HIGH_COURT_TABLE,
    }
)
