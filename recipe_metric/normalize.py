from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType

from .models import Amount, ConvertedQuantity, InvalidAmount, UnitConversion


# unicode vulgar fractions
FRACTION_GLYPHS = MappingProxyType({
    "½": 1 / 2,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "¼": 1 / 4,
    "¾": 3 / 4,
    "⅕": 1 / 5,
    "⅖": 2 / 5,
    "⅗": 3 / 5,
    "⅘": 4 / 5,
    "⅙": 1 / 6,
    "⅚": 5 / 6,
    "⅐": 1 / 7,
    "⅛": 1 / 8,
    "⅜": 3 / 8,
    "⅝": 5 / 8,
    "⅞": 7 / 8,
    "⅑": 1 / 9,
    "⅒": 1 / 10,
})

_CUP = UnitConversion(unit="ml", factor=240.0)
_OUNCE = UnitConversion(unit="g", factor=28.3495)
_POUND = UnitConversion(unit="g", factor=453.592)

UNIT_CONVERSIONS = MappingProxyType({
    "cup": _CUP,
    "cups": _CUP,
    "ounce": _OUNCE,
    "ounces": _OUNCE,
    "oz": _OUNCE,
    "pound": _POUND,
    "pounds": _POUND,
    "lb": _POUND,
})

_TWO_PLACES = Decimal("0.01")


def _parse_number(tok: str) -> float | None:
    try:
        return float(tok)
    except ValueError:
        return None


def parse_amount(tok: str) -> Amount | InvalidAmount:
    """Resolve an amount token like '2', '1.5', '3/4' or '¾'.

    Never raises; an unusable token comes back as InvalidAmount so callers can
    leave the original text alone.
    """
    if tok in FRACTION_GLYPHS:
        return Amount(FRACTION_GLYPHS[tok])

    if "/" in tok:
        parts = tok.split("/")
        if len(parts) != 2:
            return InvalidAmount(tok)
        num = _parse_number(parts[0])
        den = _parse_number(parts[1])
        if num is None or den is None or den == 0:
            return InvalidAmount(tok)
        value = num / den
    else:
        value = _parse_number(tok)
        if value is None:
            return InvalidAmount(tok)

    if math.isnan(value) or math.isinf(value) or value < 0:
        return InvalidAmount(tok)
    return Amount(value)


def convert_unit(unit: str, amount: float) -> ConvertedQuantity | None:
    """Imperial -> metric. Returns None for units we don't convert (tsp, pinch...)."""
    conversion = UNIT_CONVERSIONS.get(unit.strip().lower())
    if conversion is None:
        return None
    return ConvertedQuantity(unit=conversion.unit, amount=amount * conversion.factor)


def format_amount(amount: float) -> str:
    if amount % 1 == 0:
        return str(int(amount))
    # str() first so 0.125 rounds as written rather than as its binary value
    return str(Decimal(str(amount)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))
