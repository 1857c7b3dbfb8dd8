from datetime import datetime, timezone

import pytest

from indicator_dashboard.ui.components.formatting import (
    DETAIL_PLACEHOLDER,
    LIST_PLACEHOLDER,
    currency_code_for,
    format_currency,
    format_datetime_br,
    format_value,
    is_sentinel,
    parse_localized_number,
)


@pytest.mark.parametrize("raw", [None, "", "   ", "N/A", "n/d", "-", "#NUM!", float("nan")])
def test_sentinels_render_placeholder(raw):
    assert is_sentinel(raw)
    assert format_value(raw, "number", placeholder=LIST_PLACEHOLDER) == "N/A"
    assert format_value(raw, "currency", "BRL", placeholder=DETAIL_PLACEHOLDER) == "-"


def test_zero_is_not_a_sentinel():
    assert not is_sentinel(0)
    assert format_value(0, "number") == "0"


def test_currency_uses_brazilian_separators():
    assert format_value(1234.5, "currency", "BRL") == "R$ 1.234,50"
    assert format_value("1.234,5", "currency") == "R$ 1.234,50"
    assert format_currency(-12.5) == "-R$ 12,50"


def test_currency_with_iso_unit():
    assert currency_code_for("usd") == "USD"
    assert currency_code_for("R$") == "BRL"
    assert currency_code_for("/10") == "BRL"
    assert format_value(10, "currency", "USD") == "US$ 10,00"


def test_percentage_from_comma_string():
    assert format_value("56,40", "percentage") == "56,40%"
    assert format_value("56,40", "percentage", "%") == "56,40%"
    assert format_value(24, "percentage") == "24,00%"


def test_percentage_with_other_unit():
    assert format_value(3, "percentage", "pp") == "3,00 pp"


def test_number_with_unit_is_idempotent():
    first = format_value(10, "number", "dias")
    assert first == "10 dias"
    assert format_value(first, "number", "dias") == "10 dias"


def test_number_keeps_source_precision():
    assert format_value(12.5, "number") == "12,5"
    assert format_value("8,25", "number") == "8,25"
    assert format_value(1500000, "number") == "1.500.000"
    assert format_value(0.1 + 0.2, "number") == "0,3"


def test_unparsable_string_is_returned_with_unit():
    assert format_value("em análise", "number") == "em análise"
    assert format_value("em análise", "number", "dias") == "em análise dias"


def test_parse_localized_number():
    assert parse_localized_number("1.234,56") == pytest.approx(1234.56)
    assert parse_localized_number("42") == 42.0
    assert parse_localized_number("abc") is None
    assert parse_localized_number("inf") is None
    assert parse_localized_number(True) is None


def test_format_datetime_br_uses_sao_paulo_time():
    moment = datetime(2026, 10, 18, 13, 19, tzinfo=timezone.utc)
    assert format_datetime_br(moment) == "18 de outubro de 2026 às 10:19"
