# lp_core/tariffs/conf.py
from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

DEFAULTS: dict[str, Any] = {
    "VAT_RATE": "0.15",
    "DECIMAL_PLACES": 2,
    "TABLES": "lp_core.tariffs.tables.DEFAULT_TABLES",
}


def _tariff_settings() -> dict[str, Any]:
    """
    settings.TARIFFS merged over DEFAULTS.
    Falls back to DEFAULTS when Django settings are not configured
    (engine used as a plain library).
    """
    try:
        overrides = getattr(settings, "TARIFFS", None) or {}
    except ImproperlyConfigured:
        overrides = {}
    return {**DEFAULTS, **overrides}


def get_vat_rate() -> Decimal:
    raw = _tariff_settings()["VAT_RATE"]
    rate = Decimal(str(raw))
    if rate < 0:
        raise ImproperlyConfigured("TARIFFS['VAT_RATE'] must be >= 0.")
    return rate


def get_decimal_places() -> int:
    return int(_tariff_settings()["DECIMAL_PLACES"])


def get_tables():
    tables = _tariff_settings()["TABLES"]
    if isinstance(tables, str):
        tables = import_string(tables)
    return tables
