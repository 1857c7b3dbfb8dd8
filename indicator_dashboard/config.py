"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

import streamlit as st

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Indicadores Seven"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_PACING_SECONDS = 0.1
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str


# Ordered view definitions for the dashboard
VIEWS: List[TabConfig] = [
    TabConfig("list", "Lista"),
    TabConfig("charts", "Gráficos"),
    TabConfig("data_entry", "Novo Registro"),
]


def _get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        pass
    return default


def _get_float(name: str, default: float) -> float:
    raw = _get_secret(name)
    if raw is None or not str(raw).strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid value for %s: %r, using %s", name, raw, default)
        return default
    if value < 0:
        logger.warning("Negative value for %s: %r, using %s", name, raw, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    apps_script_url: str = ""
    title: str = DEFAULT_TITLE
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS
    submit_pacing: float = DEFAULT_PACING_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def has_endpoint(self) -> bool:
        return bool(self.apps_script_url and self.apps_script_url.strip())

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            apps_script_url=(_get_secret("APPS_SCRIPT_URL", "") or "").strip(),
            title=_get_secret("DASHBOARD_TITLE", DEFAULT_TITLE) or DEFAULT_TITLE,
            request_timeout=_get_float("REQUEST_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            submit_pacing=_get_float("SUBMIT_PACING_SECONDS", DEFAULT_PACING_SECONDS),
            log_level=(_get_secret("LOG_LEVEL", DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
        )
