from __future__ import annotations

import streamlit as st

from indicator_dashboard.data.models import DashboardData, Indicator, Sector
from indicator_dashboard.ui.components.kpi import indicator_cards, render_kpi_cards
from indicator_dashboard.ui.components.tables import render_table
from indicator_dashboard.ui.pages import indicator_detail
from indicator_dashboard.ui.pages.context import PageContext
from indicator_dashboard.ui.pages.helpers import sector_table_frame, trend_symbol, truncate_observation


def _render_observation(indicator: Indicator, key: str) -> None:
    text, truncated = truncate_observation(indicator.last_record_observation)
    if text:
        if truncated and st.toggle("Ver mais", key=f"more_{key}"):
            text = indicator.last_record_observation or text
        st.markdown(f"**Obs:** {text}")
    if indicator.last_record_files_link:
        st.markdown(f"**Arquivos:** [Abrir Link]({indicator.last_record_files_link})")


def _render_indicator(sector: Sector, indicator: Indicator) -> None:
    key = f"{sector.id}_{indicator.id}"
    with st.container(border=True):
        symbol = trend_symbol(indicator.trend)
        st.markdown(f"**{indicator.name}** {symbol}".strip())
        render_kpi_cards(indicator_cards(indicator), columns=4)
        _render_observation(indicator, key)
        if st.checkbox("Ver detalhes", key=f"detail_{key}"):
            indicator_detail.render(indicator, key_prefix=f"{sector.id}_")


def _render_sector(sector: Sector) -> None:
    st.subheader(sector.name)
    if sector.description:
        st.caption(sector.description)
    if sector.sector_observation:
        st.markdown(f"**Observação do setor:** {sector.sector_observation}")
    if sector.sector_files_link:
        st.markdown(f"**Arquivos do setor:** [Abrir Link]({sector.sector_files_link})")

    for indicator in sector.indicators:
        _render_indicator(sector, indicator)

    with st.expander("Tabela do setor"):
        render_table(sector_table_frame(sector), export_file_name=f"{sector.id}.csv")


def render(data: DashboardData, context: PageContext) -> None:
    if not data.sectors:
        st.info("Nenhum dado de setor para exibir.")
        return
    for sector in data.sectors:
        _render_sector(sector)
        st.divider()
