# lp_core/tariffs/money.py
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from rest_framework.exceptions import ValidationError

from lp_core.tariffs.conf import get_decimal_places

ZERO = Decimal("0.00")

# Largest value the 12 digit, 2 place money columns can store
MAX_AMOUNT = Decimal("9999999999.99")


def to_decimal(value, field_name: str = "amount") -> Decimal:
    """
    Accepts Decimal / str / int / float and converts to Decimal safely.
    Raises ValidationError for invalid or non-finite values.
    """
    if isinstance(value, bool):
        raise ValidationError({field_name: "Invalid decimal value."})
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            # str() keeps floats like 0.15 from dragging binary noise along
            result = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise ValidationError({field_name: "Invalid decimal value."})

    if not result.is_finite():
        raise ValidationError({field_name: "Invalid decimal value."})
    return result


def quantum(places: int | None = None) -> Decimal:
    places = get_decimal_places() if places is None else places
    return Decimal(1).scaleb(-places)


def round2(value, places: int | None = None) -> Decimal:
    """
    Half-up rounding to the configured money precision (2 places by default).
    """
    try:
        return to_decimal(value).quantize(quantum(places), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError({"amount": "Amount is out of range."})
