from indicator_dashboard.data.models import HistoricalPoint, Indicator, Sector, Trend
from indicator_dashboard.ui.pages.helpers import (
    has_numeric_metrics,
    history_frame,
    sector_table_frame,
    trend_symbol,
    truncate_observation,
    value_target_frame,
    y_domain,
)


def test_truncate_observation():
    assert truncate_observation(None) == ("", False)
    assert truncate_observation("curta") == ("curta", False)
    text, truncated = truncate_observation("x" * 80)
    assert truncated
    assert text == "x" * 60 + "..."


def test_trend_symbol():
    assert trend_symbol(Trend.UP) == "▲"
    assert trend_symbol(None) == ""


def test_value_target_frame_statuses():
    indicator = Indicator(
        id="c_tg",
        name="%TG",
        value="56,40",
        format="percentage",
        target=40,
        average_7_days=30,
        average_30_days="N/D",
    )
    frame = value_target_frame(indicator)
    assert list(frame["metric"]) == ["Último Registro", "Média 7 Dias", "Média 30 Dias"]
    assert list(frame["status"]) == ["meets", "below", "no_data"]
    assert frame.loc[0, "value_label"] == "56,40%"
    assert frame.loc[2, "value_label"] == "-"


def test_value_target_frame_uses_sums_for_summed_indicators():
    indicator = Indicator(id="c_v", name="VENDA TG", value=5, target=10, sum_7_days=70, sum_30_days=300,
                          original_id="venda-tg")
    frame = value_target_frame(indicator)
    assert list(frame["metric"]) == ["Último Registro", "Soma 7 Dias", "Soma 30 Dias"]


def test_value_target_frame_without_target_is_empty():
    assert value_target_frame(Indicator(id="x", name="X", value=1)).empty


def test_has_numeric_metrics():
    assert has_numeric_metrics(Indicator(id="x", name="X", value="12,5"))
    assert not has_numeric_metrics(Indicator(id="x", name="X", value="N/A", average_7_days="-"))


def test_history_frame_sorted_and_numeric_only():
    indicator = Indicator(
        id="x",
        name="X",
        value=3,
        historical_data=(
            HistoricalPoint("2024-05-03", 3),
            HistoricalPoint("2024-05-01", "1,5"),
            HistoricalPoint("2024-05-02", "N/A"),
        ),
    )
    frame = history_frame(indicator)
    assert list(frame["label"]) == ["01/05", "03/05"]
    assert list(frame["value"]) == [1.5, 3.0]


def test_y_domain():
    assert y_domain([]) is None
    assert y_domain([5, 5]) == (4.0, 6.0)
    assert y_domain([0, 100]) == (-10.0, 110.0)


def test_sector_table_frame():
    sector = Sector(
        id="s",
        name="S",
        indicators=(Indicator(id="s_a", name="A", value="N/A", trend=Trend.DOWN, average_7_days=2),),
    )
    frame = sector_table_frame(sector)
    row = frame.iloc[0]
    assert row["Último Registro"] == "N/A"
    assert row["Meta"] == "N/A"
    assert row["7 Dias"] == "2 (Média)"
    assert row["Tendência"] == "▼"
