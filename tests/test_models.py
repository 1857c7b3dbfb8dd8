import pytest

from indicator_dashboard.data.models import Indicator, Trend, parse_localized_number


@pytest.mark.parametrize(
    "raw, expected",
    [("1.234,5", 1234.5), ("40", 40.0), ("8,5", 8.5), (90, 90), ("N/A", None), (True, None), (None, None)],
)
def test_target_uses_comma_decimal_parsing(raw, expected):
    indicator = Indicator.from_dict({"id": "x", "name": "X", "value": 1, "target": raw})
    assert indicator.target == expected
    if expected is not None:
        assert indicator.target == parse_localized_number(raw)


def test_from_dict_defaults_and_camel_case():
    indicator = Indicator.from_dict(
        {"id": "s_a", "name": "A", "format": "Percentage", "trend": "UP", "lastRecordFilesLink": " "}
    )
    assert indicator.value == "N/A"
    assert indicator.format == "percentage"
    assert indicator.trend is Trend.UP
    assert indicator.last_record_files_link is None
    assert indicator.is_mandatory
    assert "lastRecordFilesLink" not in indicator.as_dict()
