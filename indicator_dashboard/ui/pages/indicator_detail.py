from __future__ import annotations

import streamlit as st

from indicator_dashboard.data.models import Indicator
from indicator_dashboard.ui.components.charts import history_area_chart, render_plotly
from indicator_dashboard.ui.components.formatting import DETAIL_PLACEHOLDER
from indicator_dashboard.ui.components.kpi import indicator_cards, render_kpi_cards
from indicator_dashboard.ui.pages.helpers import history_frame, y_domain


def render(indicator: Indicator, key_prefix: str = "") -> None:
    render_kpi_cards(indicator_cards(indicator, placeholder=DETAIL_PLACEHOLDER), columns=4)

    history = history_frame(indicator)
    if len(history) > 1:
        st.markdown("##### Histórico de Dados")
        fig = history_area_chart(
            history,
            target=indicator.target,
            yaxis_range=y_domain(history["value"]),
            series_name=indicator.unit or "Valor",
        )
        render_plotly(fig, key=f"{key_prefix}history_{indicator.id}")
    else:
        st.caption("Não há dados históricos suficientes para exibir um gráfico.")

    if indicator.description:
        st.markdown("##### Descrição do Indicador")
        st.write(indicator.description)

    if indicator.last_record_observation or indicator.last_record_files_link:
        st.markdown("##### Detalhes do Último Registro")
        if indicator.last_record_observation:
            st.markdown(f"- **Observação:** {indicator.last_record_observation}")
        if indicator.last_record_files_link:
            st.markdown(f"- **Arquivos:** [Abrir Link]({indicator.last_record_files_link})")
