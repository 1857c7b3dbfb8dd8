"""
Which indicators aggregate by sum instead of average over the 7/30-day windows.

To make an indicator sum up, add its ``originalId`` (the INDICADOR_ID column
of the spreadsheet) to ``INDICATORS_TO_SUM``.
"""

from __future__ import annotations

from typing import Optional, Tuple

from indicator_dashboard.data.models import Indicator, IndicatorValue

INDICATORS_TO_SUM = frozenset(
    {
        "nmero-de-vendas-totais",
        "vendas-tratamento",
        "venda-tg",
        "nmero-de-vendas-humano",
        "nmero-agendado",
        "total-de-vendas-r",
        "nmero-de-estornos-tratamentosatend",
        "nmero-de-estornos-suplementos",
        "estornos-realizadosdia-r",
    }
)

SUM_LABELS = ("Soma 7 Dias", "Soma 30 Dias")
AVERAGE_LABELS = ("Média 7 Dias", "Média 30 Dias")


def should_sum(original_id: Optional[str]) -> bool:
    if not original_id:
        return False
    return original_id in INDICATORS_TO_SUM


def aggregate_metrics(
    indicator: Indicator,
) -> Tuple[str, Optional[IndicatorValue], str, Optional[IndicatorValue]]:
    """Return ``(label_7, value_7, label_30, value_30)`` for the indicator's aggregate kind."""
    if should_sum(indicator.original_id):
        return SUM_LABELS[0], indicator.sum_7_days, SUM_LABELS[1], indicator.sum_30_days
    return AVERAGE_LABELS[0], indicator.average_7_days, AVERAGE_LABELS[1], indicator.average_30_days
