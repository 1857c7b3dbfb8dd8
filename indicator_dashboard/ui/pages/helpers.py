from __future__ import annotations

import math
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from indicator_dashboard.data.models import Indicator, Sector, Trend
from indicator_dashboard.data.summation import aggregate_metrics
from indicator_dashboard.ui.components.formatting import (
    DETAIL_PLACEHOLDER,
    LIST_PLACEHOLDER,
    format_value,
    parse_localized_number,
)

MAX_OBSERVATION_LENGTH = 60
TREND_SYMBOLS = {
    Trend.UP: "▲",
    Trend.DOWN: "▼",
    Trend.STABLE: "■",
}
VALUE_TARGET_COLUMNS = ["metric", "value", "target", "status", "value_label", "target_label"]
HISTORY_COLUMNS = ["date", "label", "value", "display"]


def truncate_observation(text: Optional[str], limit: int = MAX_OBSERVATION_LENGTH) -> Tuple[str, bool]:
    if not text:
        return "", False
    if len(text) <= limit:
        return text, False
    return f"{text[:limit]}...", True


def trend_symbol(trend: Optional[Trend]) -> str:
    return TREND_SYMBOLS.get(trend, "") if trend else ""


def numeric_values(values: Iterable[object]) -> List[float]:
    parsed = (parse_localized_number(value) for value in values)
    return [value for value in parsed if value is not None]


def has_numeric_metrics(indicator: Indicator) -> bool:
    _, value_7, _, value_30 = aggregate_metrics(indicator)
    return bool(numeric_values([indicator.value, value_7, value_30]))


def value_target_frame(indicator: Indicator) -> pd.DataFrame:
    """
    One row per metric (last record, 7-day, 30-day) compared with the target.

    ``status`` is "meets" when the value reaches the target, "below" when it
    does not and "no_data" for sentinel or non-numeric values. Indicators
    without a target produce an empty frame.
    """
    if indicator.target is None:
        return pd.DataFrame(columns=VALUE_TARGET_COLUMNS)

    label_7, value_7, label_30, value_30 = aggregate_metrics(indicator)
    target_label = format_value(indicator.target, indicator.format, indicator.unit)
    rows = []
    for metric, raw in (("Último Registro", indicator.value), (label_7, value_7), (label_30, value_30)):
        numeric = parse_localized_number(raw)
        if numeric is None:
            status = "no_data"
        elif numeric >= indicator.target:
            status = "meets"
        else:
            status = "below"
        rows.append(
            {
                "metric": metric,
                "value": numeric,
                "target": float(indicator.target),
                "status": status,
                "value_label": format_value(raw, indicator.format, indicator.unit, placeholder=DETAIL_PLACEHOLDER),
                "target_label": target_label,
            }
        )
    return pd.DataFrame(rows, columns=VALUE_TARGET_COLUMNS)


def history_frame(indicator: Indicator) -> pd.DataFrame:
    """Numeric history points, oldest first, with dd/mm labels for the x axis."""
    rows = []
    for point in indicator.historical_data:
        numeric = parse_localized_number(point.value)
        if numeric is None:
            continue
        parsed = pd.to_datetime(point.date, errors="coerce")
        if pd.isna(parsed):
            continue
        rows.append(
            {
                "date": parsed,
                "label": parsed.strftime("%d/%m"),
                "value": numeric,
                "display": format_value(numeric, indicator.format, indicator.unit),
            }
        )
    if not rows:
        return pd.DataFrame(columns=HISTORY_COLUMNS)
    return pd.DataFrame(rows, columns=HISTORY_COLUMNS).sort_values("date").reset_index(drop=True)


def y_domain(values: Iterable[float]) -> Optional[Tuple[float, float]]:
    values = [float(value) for value in values]
    if not values:
        return None
    low, high = min(values), max(values)
    padding = (high - low) * 0.1 or 1
    return float(math.floor(low - padding)), float(math.ceil(high + padding))


def sector_table_frame(sector: Sector, placeholder: str = LIST_PLACEHOLDER) -> pd.DataFrame:
    rows = []
    for indicator in sector.indicators:
        label_7, value_7, label_30, value_30 = aggregate_metrics(indicator)
        rows.append(
            {
                "Indicador": indicator.name,
                "Último Registro": format_value(indicator.value, indicator.format, indicator.unit, placeholder),
                "Meta": format_value(indicator.target, indicator.format, indicator.unit, placeholder),
                "7 Dias": f"{format_value(value_7, indicator.format, indicator.unit, placeholder)} ({label_7.split()[0]})",
                "30 Dias": f"{format_value(value_30, indicator.format, indicator.unit, placeholder)} ({label_30.split()[0]})",
                "Tendência": trend_symbol(indicator.trend),
            }
        )
    return pd.DataFrame(rows)
