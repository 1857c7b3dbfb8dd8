from __future__ import annotations

import datetime as dt
import logging

import streamlit as st

from indicator_dashboard.data.errors import FormValidationError
from indicator_dashboard.data.models import DashboardData, Sector
from indicator_dashboard.data.sample import build_sample_sectors
from indicator_dashboard.data.submission import build_form_entries, submit_batch
from indicator_dashboard.ui.layout import store_submission_status
from indicator_dashboard.ui.pages.context import PageContext

logger = logging.getLogger(__name__)


def _indicator_label(name: str, mandatory: bool) -> str:
    return f"{name} *" if mandatory else name


def _render_form(sector: Sector, context: PageContext) -> None:
    with st.form(key=f"entry_form_{sector.id}", clear_on_submit=False):
        record_date = st.date_input("Data do registro", value=dt.date.today(), format="DD/MM/YYYY")

        values, observations, links = {}, {}, {}
        for indicator in sector.indicators:
            values[indicator.id] = st.text_input(
                _indicator_label(indicator.name, indicator.is_mandatory),
                key=f"value_{indicator.id}",
                help=indicator.description,
            )
            with st.expander(f"Observação / arquivos: {indicator.name}"):
                observations[indicator.id] = st.text_area("Observação", key=f"obs_{indicator.id}")
                links[indicator.id] = st.text_input("Link de arquivos", key=f"link_{indicator.id}")

        st.markdown("**Setor**")
        sector_observation = st.text_area("Observação do setor", key=f"sector_obs_{sector.id}")
        sector_files_link = st.text_input("Link de arquivos do setor", key=f"sector_link_{sector.id}")
        st.caption("* indicador obrigatório")

        submitted = st.form_submit_button(
            "Enviar registros",
            type="primary",
            disabled=not context.settings.has_endpoint,
        )

    if not submitted:
        return

    try:
        entries = build_form_entries(
            sector,
            values,
            record_date,
            observations=observations,
            files_links=links,
            sector_observation=sector_observation,
            sector_files_link=sector_files_link,
        )
    except FormValidationError as exc:
        st.error(str(exc))
        return

    logger.info("Submitting %d entries for sector %s", len(entries), sector.id)
    with st.spinner(f"Enviando {len(entries)} registro(s)..."):
        report = submit_batch(
            context.loader.client,
            context.settings.apps_script_url,
            entries,
            pacing_seconds=context.settings.submit_pacing,
        )
    store_submission_status(report)
    # Background refresh: keep the current dashboard on screen if it fails
    context.loader.load(silent=True)
    st.rerun()


def render(data: DashboardData, context: PageContext) -> None:
    st.subheader("Novo Registro")
    if not context.settings.has_endpoint:
        st.warning("URL do Google Apps Script não configurada para envio.")

    sectors = build_sample_sectors()
    sector_names = [sector.name for sector in sectors]
    selected = st.selectbox("Setor", sector_names, key="entry_sector")
    sector = next(item for item in sectors if item.name == selected)
    if sector.description:
        st.caption(sector.description)
    _render_form(sector, context)
