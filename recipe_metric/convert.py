from __future__ import annotations

import logging
import re

from .normalize import FRACTION_GLYPHS, convert_unit, format_amount, parse_amount

logger = logging.getLogger(__name__)

# WP Recipe Maker ingredient markup
_INGREDIENT_RE = re.compile(r'<li class="wprm-recipe-ingredient"[^>]*>[\s\S]*?</li>')
_AMOUNT_SPAN_RE = re.compile(r'<span class="wprm-recipe-ingredient-amount">([^<]+)</span>')
_UNIT_SPAN_RE = re.compile(r'<span class="wprm-recipe-ingredient-unit">([^<]+)</span>')

_GLYPHS = "".join(FRACTION_GLYPHS)

# Longer unit spellings first so "cups" is not matched as "cup" + "s".
_PLAIN_TEXT_RE = re.compile(
    r"(\d+/\d+|\d+\.\d+|\d+|[" + _GLYPHS + r"]+)\s+"
    r"(cups|cup|ounces|ounce|oz|pounds|pound|lb)\b",
    re.IGNORECASE,
)


def _convert(amount_text: str, unit_text: str) -> tuple[str, str] | None:
    """Return (formatted amount, metric unit), or None to leave the text alone."""
    amount = parse_amount(amount_text)
    if not amount.ok:
        logger.warning("%s", amount)
        return None

    converted = convert_unit(unit_text, amount.value)
    if converted is None:
        return None
    return format_amount(converted.amount), converted.unit


def _replace_ingredient(m: re.Match) -> str:
    block = m.group(0)
    amount_m = _AMOUNT_SPAN_RE.search(block)
    unit_m = _UNIT_SPAN_RE.search(block)
    if not amount_m or not unit_m:
        return block

    result = _convert(amount_m.group(1).strip(), unit_m.group(1).strip())
    if result is None:
        return block

    amount, unit = result
    block = block.replace(
        amount_m.group(0),
        f'<span class="wprm-recipe-ingredient-amount">{amount}</span>',
        1,
    )
    return block.replace(
        unit_m.group(0),
        f'<span class="wprm-recipe-ingredient-unit">{unit}</span>',
        1,
    )


def _replace_plain_text(m: re.Match) -> str:
    result = _convert(m.group(1).strip(), m.group(2).strip())
    if result is None:
        return m.group(0)
    amount, unit = result
    return f"{amount} {unit}"


def convert_structured(html: str) -> str:
    """Rewrite amount/unit spans inside WPRM ingredient list items."""
    return _INGREDIENT_RE.sub(_replace_ingredient, html)


def convert_plain_text(html: str) -> str:
    """Rewrite free-text '<amount> <unit>' pairs, ignoring markup entirely."""
    return _PLAIN_TEXT_RE.sub(_replace_plain_text, html)


def convert_html(html: str) -> str:
    """Convert imperial ingredient measurements in an HTML page to metric.

    Structured ingredient markup is handled first, then free text. Anything
    that can't be converted is left exactly as it was.
    """
    return convert_plain_text(convert_structured(html))
