from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import streamlit as st

from indicator_dashboard.data.models import Indicator, IndicatorValue
from indicator_dashboard.data.summation import aggregate_metrics
from indicator_dashboard.ui.components.formatting import LIST_PLACEHOLDER, format_value


@dataclass
class KpiCard:
    label: str
    value: Optional[IndicatorValue] = None
    value_display: Optional[str] = None
    fmt: Optional[str] = None
    unit: Optional[str] = None
    placeholder: str = LIST_PLACEHOLDER
    help_text: Optional[str] = None


def _format_value(card: KpiCard) -> str:
    if card.value_display is not None:
        return card.value_display
    return format_value(card.value, card.fmt, card.unit, placeholder=card.placeholder)


def indicator_cards(indicator: Indicator, placeholder: str = LIST_PLACEHOLDER) -> List[KpiCard]:
    """Last record, 7/30-day aggregates and target as cards, in display order."""
    label_7, value_7, label_30, value_30 = aggregate_metrics(indicator)
    common = dict(fmt=indicator.format, unit=indicator.unit, placeholder=placeholder)
    cards = [
        KpiCard(label="Último Registro", value=indicator.value, **common),
        KpiCard(label=label_7, value=value_7, **common),
        KpiCard(label=label_30, value=value_30, **common),
    ]
    if indicator.target is not None:
        cards.append(KpiCard(label="Meta", value=indicator.target, **common))
    return cards


def render_kpi_cards(cards: Sequence[KpiCard], columns: int = 4) -> None:
    """
    Render KPI cards in a responsive grid using Streamlit columns.
    """
    cards = list(cards)
    if not cards:
        st.info("Nenhum indicador disponível.")
        return

    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                st.metric(label=card.label, value=_format_value(card))
                if card.help_text:
                    st.caption(card.help_text)
