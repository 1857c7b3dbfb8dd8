"""
Reusable helpers for rendering indicator tables with consistent configuration.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd
import streamlit as st


def render_table(
    df: pd.DataFrame,
    height: Optional[int] = None,
    show_index: bool = False,
    export_file_name: Optional[str] = None,
) -> None:
    if df.empty:
        st.info("Nenhum dado de indicador para exibir.")
        return

    options = {"height": height} if height else {}
    st.dataframe(
        df,
        use_container_width=True,
        hide_index=not show_index,
        **options,
    )

    if export_file_name:
        csv_bytes = df.to_csv(index=show_index).encode("utf-8")
        st.download_button(
            "Baixar CSV",
            data=csv_bytes,
            file_name=export_file_name,
            mime="text/csv",
            key=f"download_{export_file_name}",
        )
