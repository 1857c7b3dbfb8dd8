"""
Layout helpers for the Streamlit application (page setup, header, banners, sidebar).
"""

from __future__ import annotations

from typing import Optional, Tuple

import streamlit as st

from indicator_dashboard.config import Settings
from indicator_dashboard.data.models import DashboardData
from indicator_dashboard.data.state import SOURCE_REMOTE, AppState
from indicator_dashboard.data.submission import STATUS_ERROR, STATUS_SUCCESS, SubmissionReport
from indicator_dashboard.ui.components.formatting import format_datetime_br

SUBMISSION_STATUS_KEY = "submission_status"
BANNER_DISMISSED_KEY = "source_banner_dismissed"


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title="Indicadores",
        layout="wide",
        page_icon=":bar_chart:",
    )


def render_header(data: DashboardData) -> None:
    st.title(data.title)
    st.caption(f"Última atualização: {format_datetime_br(data.last_updated)}")


def banner_signature(state: AppState) -> Tuple[str, Optional[str]]:
    # A new warning after a silent reload brings a dismissed banner back
    return state.source_message, state.warning


def render_source_banners(state: AppState) -> None:
    """Data-source message plus the degraded-mode warning; the pair can be dismissed."""
    if st.session_state.get(BANNER_DISMISSED_KEY) == banner_signature(state):
        return
    if not state.source_message and not state.warning:
        return

    text_col, button_col = st.columns([12, 1])
    with text_col:
        if state.source_message:
            if state.warning:
                st.warning(state.source_message)
            else:
                st.info(state.source_message)
        if state.warning and state.warning not in state.source_message:
            st.warning(f"Aviso: {state.warning}")
    with button_col:
        if st.button("Fechar", key="dismiss_source_banner"):
            st.session_state[BANNER_DISMISSED_KEY] = banner_signature(state)
            st.rerun()


def render_submission_status() -> None:
    status = st.session_state.get(SUBMISSION_STATUS_KEY)
    if not status:
        return
    kind, message = status
    text_col, button_col = st.columns([12, 1])
    with text_col:
        if kind == STATUS_SUCCESS:
            st.success(message)
        elif kind == STATUS_ERROR:
            st.error(message)
        else:
            st.info(message)
    with button_col:
        if st.button("Fechar", key="dismiss_submission_status"):
            st.session_state.pop(SUBMISSION_STATUS_KEY, None)
            st.rerun()


def store_submission_status(report: SubmissionReport) -> None:
    st.session_state[SUBMISSION_STATUS_KEY] = (report.status, report.message)


def render_error_view(state: AppState) -> bool:
    """Full-page error shown only when no data at all could be loaded. Returns True on retry."""
    st.error(state.error or "Não foi possível carregar os dados do painel.")
    return st.button("Tentar novamente", type="primary")


def sidebar_controls(settings: Settings, state: AppState) -> bool:
    """Render the sidebar and return True when a refresh was requested."""
    st.sidebar.header("Fonte de dados")
    if settings.has_endpoint:
        st.sidebar.caption("Google Apps Script configurado.")
    else:
        st.sidebar.caption("Sem URL do Apps Script: modo de dados de exemplo.")

    if state.source:
        source_label = "Google Sheets" if state.source == SOURCE_REMOTE else "Dados de exemplo"
        st.sidebar.markdown(f"**Exibindo:** {source_label}")

    return st.sidebar.button("🔄 Atualizar dados", disabled=state.is_loading)
