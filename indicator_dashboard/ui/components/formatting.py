"""
Utility helpers for formatting indicator values, currency strings, and
percentages using the pt-BR conventions ("." thousands, "," decimals).
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from indicator_dashboard.data.models import normalize_numeric_text, parse_localized_number

SENTINELS = {"N/A", "N/D", "-", "#NUM!"}
# The list tiles and the detail/chart views historically used different placeholders
LIST_PLACEHOLDER = "N/A"
DETAIL_PLACEHOLDER = "-"

DEFAULT_CURRENCY = "BRL"
CURRENCY_SYMBOLS = {
    "BRL": "R$",
    "USD": "US$",
    "EUR": "€",
    "GBP": "£",
}
MAX_NUMBER_DECIMALS = 10
DISPLAY_TIMEZONE = "America/Sao_Paulo"
MONTHS_PT = [
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]

_BR_SEPARATORS = str.maketrans({",": ".", ".": ","})


def is_sentinel(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str):
        text = value.strip()
        return not text or text.upper() in SENTINELS
    return False


def _source_decimals(value: Any, numeric: float) -> int:
    if numeric.is_integer():
        return 0
    if isinstance(value, str):
        text = normalize_numeric_text(value)
    else:
        text = repr(round(numeric, MAX_NUMBER_DECIMALS))
    try:
        exponent = Decimal(text).as_tuple().exponent
    except InvalidOperation:
        return 0
    if not isinstance(exponent, int):
        return 0
    return min(max(-exponent, 0), MAX_NUMBER_DECIMALS)


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if value is None:
        return "–"
    try:
        return f"{value:,.{decimals}f}".translate(_BR_SEPARATORS)
    except (TypeError, ValueError):
        return "–"


def currency_code_for(unit: Optional[str]) -> str:
    if unit and len(unit) == 3 and unit.isalpha():
        return unit.upper()
    return DEFAULT_CURRENCY


def format_currency(value: Optional[float], currency: str = DEFAULT_CURRENCY, decimals: int = 2) -> str:
    if value is None:
        return "–"
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return "–"
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    sign = "-" if round(numeric, decimals) < 0 else ""
    return f"{sign}{symbol} {format_number(abs(numeric), decimals)}"


def format_percent(value: Optional[float], decimals: int = 2, unit: Optional[str] = None) -> str:
    if value is None:
        return "–"
    suffix = "%" if not unit or unit == "%" else f" {unit}"
    return f"{format_number(value, decimals)}{suffix}"


def format_value(
    value: Any,
    fmt: Optional[str] = None,
    unit: Optional[str] = None,
    placeholder: str = DETAIL_PLACEHOLDER,
) -> str:
    """
    Render an indicator value for display. Never raises.

    Sentinels ("N/A", "N/D", "-", blank, "#NUM!") become ``placeholder``.
    Strings are read with "," as the decimal separator; strings that are not
    numbers come back unchanged, with the unit appended when it is missing.

    - currency: 2 decimals, code BRL unless ``unit`` is a 3-letter ISO code.
    - percentage: 2 decimals and "%", or `` {unit}`` for any other unit.
    - number: keeps the precision of the source value (at most 10 decimals)
      and appends `` {unit}`` unless the text already ends with it.
    """
    if is_sentinel(value):
        return placeholder
    unit = unit or None

    numeric = parse_localized_number(value)
    if numeric is None:
        text = value if isinstance(value, str) else str(value)
        if unit and unit not in text:
            return f"{text} {unit}"
        return text

    if fmt == "currency":
        return format_currency(numeric, currency=currency_code_for(unit))
    if fmt == "percentage":
        return format_percent(numeric, decimals=2, unit=unit)

    formatted = format_number(numeric, _source_decimals(value, numeric))
    if unit and not formatted.endswith(unit):
        formatted = f"{formatted} {unit}"
    return formatted


def _display_zone() -> ZoneInfo:
    try:
        return ZoneInfo(DISPLAY_TIMEZONE)
    except ZoneInfoNotFoundError:
        return ZoneInfo("UTC")


def format_datetime_br(moment: Optional[datetime]) -> str:
    """Long pt-BR date with short time, e.g. "18 de outubro de 2026 às 10:19"."""
    if moment is None:
        return "–"
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    local = moment.astimezone(_display_zone())
    return f"{local.day} de {MONTHS_PT[local.month - 1]} de {local.year} às {local:%H:%M}"
