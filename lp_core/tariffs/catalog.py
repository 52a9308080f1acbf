# lp_core/tariffs/catalog.py
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Mapping

from lp_core.tariffs.conf import get_tables
from lp_core.tariffs.constants import COURT_ALIASES, MAX_FILE_PAGES, SCALE_ALIASES
from lp_core.tariffs.errors import InvalidCourtTypeError, InvalidPageCountError, InvalidScaleError
from lp_core.tariffs.money import round2
from lp_core.tariffs.tables import TariffEntry, TariffTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TariffItem:
    """
    One billable line of a resolved catalog.
    total_amount is always round2(rate * quantity); build and change items
    through recompute() so that stays true.
    """
    id: str
    description: str
    unit: str
    rate: Decimal
    quantity: int
    total_amount: Decimal
    selected: bool = False


def recompute(item: TariffItem) -> TariffItem:
    return replace(item, total_amount=round2(item.rate * item.quantity))


def _table_for(court_type: str, tables: Mapping[str, TariffTable]) -> TariffTable:
    try:
        return tables[court_type]
    except KeyError:
        raise InvalidCourtTypeError(court_type=court_type, allowed=tuple(tables))


def normalize_court_type(value, *, tables: Mapping[str, TariffTable] | None = None) -> str:
    tables = get_tables() if tables is None else tables
    raw = str(value or "").strip().lower()
    court_type = COURT_ALIASES.get(raw, raw)
    if court_type not in tables:
        raise InvalidCourtTypeError(court_type=value, allowed=tuple(tables))
    return str(court_type)


def normalize_scale(court_type: str, value, *, tables: Mapping[str, TariffTable] | None = None) -> str:
    """
    Case-insensitive match against the scales the court's table defines.
    Unknown scales are rejected, never mapped to a fallback column.
    """
    tables = get_tables() if tables is None else tables
    table = _table_for(court_type, tables)
    raw = " ".join(str(value or "").split()).upper()
    scale = SCALE_ALIASES.get(raw, raw)
    if scale not in table.scales:
        raise InvalidScaleError(court_type=court_type, scale=value, allowed=table.scales)
    return str(scale)


def validate_file_pages(file_pages) -> int:
    is_count = isinstance(file_pages, int) and not isinstance(file_pages, bool)
    if not is_count or not 0 <= file_pages <= MAX_FILE_PAGES:
        raise InvalidPageCountError(file_pages=file_pages)
    return file_pages


@dataclass(frozen=True)
class BillingContext:
    court_type: str
    scale: str
    file_pages: int

    @classmethod
    def parse(cls, court_type, scale, file_pages, *, tables=None) -> "BillingContext":
        tables = get_tables() if tables is None else tables
        court = normalize_court_type(court_type, tables=tables)
        return cls(
            court_type=court,
            scale=normalize_scale(court, scale, tables=tables),
            file_pages=validate_file_pages(file_pages),
        )


def _resolve_entry(entry: TariffEntry, table: TariffTable, context: BillingContext) -> TariffItem:
    return recompute(
        TariffItem(
            id=entry.code,
            description=entry.description,
            unit=entry.unit,
            rate=round2(entry.rate.rate_for(context.scale, table)),
            quantity=entry.default_quantity(context.file_pages),
            total_amount=Decimal("0.00"),
            selected=False,
        )
    )


def resolve_context(context: BillingContext, *, tables=None) -> tuple[TariffItem, ...]:
    tables = get_tables() if tables is None else tables
    table = _table_for(context.court_type, tables)
    items = tuple(_resolve_entry(entry, table, context) for entry in table.entries)
    logger.debug(
        "Resolved %d tariff items for court=%s scale=%s file_pages=%d",
        len(items),
        context.court_type,
        context.scale,
        context.file_pages,
    )
    return items


def resolve_catalog(court_type, scale, file_pages, *, tables=None) -> tuple[TariffItem, ...]:
    """
    Candidate billable lines for (court type, scale, file pages), in table order.

    Pure: the same inputs always give an equal catalog. Every item starts
    unselected with its total pre-computed from the default rate/quantity.

    Raises InvalidCourtTypeError / InvalidScaleError / InvalidPageCountError.
    """
    tables = get_tables() if tables is None else tables
    context = BillingContext.parse(court_type, scale, file_pages, tables=tables)
    return resolve_context(context, tables=tables)
