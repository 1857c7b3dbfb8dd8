from __future__ import annotations

import streamlit as st

from indicator_dashboard.data.models import DashboardData, Indicator, Sector
from indicator_dashboard.ui.components.charts import render_plotly, value_target_chart
from indicator_dashboard.ui.components.formatting import format_value
from indicator_dashboard.ui.pages.context import PageContext
from indicator_dashboard.ui.pages.helpers import has_numeric_metrics, value_target_frame


def _render_indicator_chart(sector: Sector, indicator: Indicator) -> None:
    if not has_numeric_metrics(indicator):
        with st.container(border=True):
            st.markdown(f"**{indicator.name}**")
            st.caption("Não há dados numéricos suficientes para exibir o gráfico deste indicador.")
            st.caption(f"Meta: {format_value(indicator.target, indicator.format, indicator.unit)}")
        return
    fig = value_target_chart(value_target_frame(indicator), title=indicator.name)
    render_plotly(fig, key=f"chart_{sector.id}_{indicator.id}")


def render(data: DashboardData, context: PageContext) -> None:
    if not data.sectors:
        st.info("Nenhum dado de setor para exibir.")
        return

    for sector in data.sectors:
        with_target = [indicator for indicator in sector.indicators if indicator.target is not None]
        if not with_target:
            continue
        st.subheader(sector.name)
        for indicator in with_target:
            _render_indicator_chart(sector, indicator)
