from indicator_dashboard.data.models import Indicator
from indicator_dashboard.data.summation import (
    AVERAGE_LABELS,
    INDICATORS_TO_SUM,
    SUM_LABELS,
    aggregate_metrics,
    should_sum,
)


def _indicator(original_id):
    return Indicator(
        id="comercial_x",
        name="X",
        value=10,
        average_7_days=9,
        average_30_days=8,
        sum_7_days=70,
        sum_30_days=300,
        original_id=original_id,
    )


def test_should_sum_matches_listed_ids_only():
    assert should_sum("venda-tg")
    assert should_sum("total-de-vendas-r")
    assert not should_sum("conversao-no-dia")
    assert not should_sum(None)
    assert not should_sum("")
    assert len(INDICATORS_TO_SUM) == 9


def test_summed_indicator_uses_sums():
    assert aggregate_metrics(_indicator("venda-tg")) == (SUM_LABELS[0], 70, SUM_LABELS[1], 300)


def test_other_indicators_use_averages():
    assert aggregate_metrics(_indicator("nota-nps")) == (AVERAGE_LABELS[0], 9, AVERAGE_LABELS[1], 8)
    assert aggregate_metrics(_indicator(None))[0] == "Média 7 Dias"
