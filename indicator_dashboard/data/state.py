"""
Application state for the dashboard and the transitions between load phases.

States are immutable; every transition returns a new ``AppState`` so the
Streamlit session can swap the whole snapshot at once.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from indicator_dashboard.data.models import DashboardData

SOURCE_REMOTE = "remote"
SOURCE_SAMPLE = "sample"


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class AppState:
    status: LoadStatus = LoadStatus.IDLE
    data: Optional[DashboardData] = None
    error: Optional[str] = None
    warning: Optional[str] = None
    source_message: str = ""
    source: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def has_data(self) -> bool:
        return self.data is not None


INITIAL_STATE = AppState()


def begin_load(state: AppState, silent: bool = False) -> AppState:
    # A silent refresh leaves the visible flags alone; only the error is cleared
    if silent:
        return replace(state, error=None)
    return replace(state, status=LoadStatus.LOADING, error=None, warning=None, source_message="")


def load_succeeded(
    state: AppState,
    data: DashboardData,
    source: str,
    message: str,
    warning: Optional[str] = None,
    silent: bool = False,
) -> AppState:
    return replace(
        state,
        status=LoadStatus.LOADED,
        data=data,
        error=None,
        warning=warning,
        source=source,
        source_message=state.source_message if silent else message,
    )


def load_failed(state: AppState, error: str, silent: bool = False) -> AppState:
    if silent and state.data is not None:
        # Keep the dashboard on screen; the failure becomes a warning
        return replace(state, status=LoadStatus.LOADED, warning=error)
    return replace(state, status=LoadStatus.FAILED, data=None, error=error, warning=None)
