from datetime import datetime, timezone

from indicator_dashboard.data.models import indicators_of
from indicator_dashboard.data.sample import (
    build_indicator,
    build_sample_sectors,
    load_sample_dashboard,
    slugify,
)
from indicator_dashboard.data.summation import INDICATORS_TO_SUM


def test_slugify_drops_non_ascii_letters():
    assert slugify("NÚMERO DE VENDAS TOTAIS") == "nmero-de-vendas-totais"
    assert slugify("ESTORNOS REALIZADOS/DIA (R$)") == "estornos-realizadosdia-r"
    assert slugify("  Venda   TG ") == "venda-tg"
    assert slugify(None) == ""


def test_build_indicator_defaults():
    indicator = build_indicator("comercial", "VENDA TG", 20)
    assert indicator.id == "comercial_venda-tg"
    assert indicator.original_id == "venda-tg"
    assert indicator.target == 22
    assert indicator.sum_7_days == 140
    assert indicator.sum_30_days == 600
    assert indicator.average_7_days == 19
    assert indicator.description == "Descrição para VENDA TG"
    assert indicator.is_mandatory


def test_build_indicator_units_follow_format():
    assert build_indicator("s", "Taxa", 5, format="percentage").unit == "%"
    assert build_indicator("s", "Receita", 5, format="currency").unit == "BRL"
    assert build_indicator("s", "Prazo", 5, unit="dias").unit == "dias"


def test_sample_ids_are_unique():
    sectors = build_sample_sectors()
    assert len({sector.id for sector in sectors}) == len(sectors) == 10
    for sector in sectors:
        ids = [indicator.id for indicator in sector.indicators]
        assert len(ids) == len(set(ids))
        assert all(indicator_id.startswith(f"{sector.id}_") for indicator_id in ids)


def test_sample_covers_every_summed_indicator():
    original_ids = {indicator.original_id for indicator in indicators_of(build_sample_sectors())}
    assert INDICATORS_TO_SUM <= original_ids


def test_sample_has_optional_indicators():
    optional = [i.name for i in indicators_of(build_sample_sectors()) if not i.is_mandatory]
    assert "Custo Logístico (R$)" in optional


def test_load_sample_dashboard_timestamp():
    now = datetime(2024, 5, 2, 12, 0, tzinfo=timezone.utc)
    data = load_sample_dashboard(now=now)
    assert data.last_updated == now
    assert data.title == "Indicadores Seven"
