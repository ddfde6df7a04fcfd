from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import PlainSerializer

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """Coerce a stored number (float, int, str) into a Decimal without float noise."""
    if value is None or value == "":
        return default
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default


def round_money(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


# Amounts stay unrounded in Python and are rounded half-up only when rendered to JSON.
Money = Annotated[
    Decimal,
    PlainSerializer(lambda value: str(round_money(value)), return_type=str, when_used="json"),
]
