from __future__ import annotations

from dataclasses import dataclass

from indicator_dashboard.config import Settings
from indicator_dashboard.data.loader import FallbackLoader
from indicator_dashboard.data.state import AppState


@dataclass
class PageContext:
    state: AppState
    settings: Settings
    loader: FallbackLoader
