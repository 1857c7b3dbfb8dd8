import indicator_dashboard.bootstrap_env  # must be first to set env/secrets
import streamlit as st

from indicator_dashboard.config import VIEWS, Settings
from indicator_dashboard.data.loader import FallbackLoader
from indicator_dashboard.data.state import LoadStatus
from indicator_dashboard.logging_setup import configure_logging
from indicator_dashboard.ui.layout import (
    render_error_view,
    render_header,
    render_source_banners,
    render_submission_status,
    setup_page,
    sidebar_controls,
)
from indicator_dashboard.ui.pages import charts_view, data_entry, list_view
from indicator_dashboard.ui.pages.context import PageContext


PAGE_RENDERERS = {
    "list": list_view.render,
    "charts": charts_view.render,
    "data_entry": data_entry.render,
}
LOADER_KEY = "dashboard_loader"


def _get_loader(settings: Settings) -> FallbackLoader:
    loader = st.session_state.get(LOADER_KEY)
    if loader is None or loader.url != settings.apps_script_url:
        loader = FallbackLoader.from_settings(settings)
        st.session_state[LOADER_KEY] = loader
    return loader


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    setup_page()

    loader = _get_loader(settings)
    refresh_requested = sidebar_controls(settings, loader.state)

    if refresh_requested or loader.state.status is LoadStatus.IDLE:
        with st.spinner("Carregando indicadores..."):
            loader.load()

    state = loader.state
    if not state.has_data:
        if render_error_view(state):
            loader.load()
            st.rerun()
        return

    render_source_banners(state)
    render_submission_status()
    render_header(state.data)

    context = PageContext(state=state, settings=settings, loader=loader)
    tab_labels = [view.label for view in VIEWS]
    streamlit_tabs = st.tabs(tab_labels)

    for streamlit_tab, view in zip(streamlit_tabs, VIEWS):
        renderer = PAGE_RENDERERS.get(view.key)
        if renderer is None:
            continue
        with streamlit_tab:
            renderer(state.data, context)


if __name__ == "__main__":
    main()
