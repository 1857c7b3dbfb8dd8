"""
Loads the dashboard from the Apps Script endpoint, falling back to the
built-in sample dataset, and keeps the resulting ``AppState``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Protocol, TypeVar

from indicator_dashboard.config import DEFAULT_TITLE, Settings
from indicator_dashboard.data.client import RemoteDataClient
from indicator_dashboard.data.models import DashboardData
from indicator_dashboard.data.sample import load_sample_dashboard
from indicator_dashboard.data.state import (
    INITIAL_STATE,
    SOURCE_REMOTE,
    SOURCE_SAMPLE,
    AppState,
    begin_load,
    load_failed,
    load_succeeded,
)

logger = logging.getLogger(__name__)

MSG_REMOTE_OK = "Dados carregados do Google Sheets via Apps Script."
MSG_NO_ENDPOINT = "URL do Google Apps Script não fornecida. Exibindo dados de exemplo."
MSG_REMOTE_FAILED = "Falha ao carregar do Google Sheets ({error}). Exibindo dados de exemplo."
MSG_BOTH_FAILED = "Primário: {primary}. Fallback: {fallback}"


class _HasId(Protocol):
    id: str


T = TypeVar("T", bound=_HasId)


def dedupe_by_id(items: Iterable[T]) -> List[T]:
    """Keep the first item seen for each id; items without an id are dropped."""
    unique: List[T] = []
    seen = set()
    for item in items or ():
        item_id = getattr(item, "id", None)
        if item is None or not item_id or item_id in seen:
            continue
        seen.add(item_id)
        unique.append(item)
    return unique


def dedupe_dashboard(data: DashboardData) -> DashboardData:
    sectors = [
        replace(sector, indicators=tuple(dedupe_by_id(sector.indicators)))
        for sector in dedupe_by_id(data.sectors)
    ]
    return replace(data, sectors=tuple(sectors))


def _error_text(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


class FallbackLoader:
    """
    Primary fetch -> sample fallback -> failed.

    Only one load runs at a time; a call that arrives while another is in
    flight is rejected and the current state is returned unchanged.
    """

    def __init__(
        self,
        url: Optional[str],
        client: Optional[RemoteDataClient] = None,
        sample_factory: Callable[[], DashboardData] = load_sample_dashboard,
        forced_title: str = DEFAULT_TITLE,
    ) -> None:
        self.url = (url or "").strip()
        self.client = client or RemoteDataClient()
        self.sample_factory = sample_factory
        self.forced_title = forced_title
        self._state = INITIAL_STATE
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "FallbackLoader":
        return cls(
            url=settings.apps_script_url,
            client=RemoteDataClient(timeout=settings.request_timeout),
            forced_title=settings.title,
        )

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def has_endpoint(self) -> bool:
        return bool(self.url)

    def _finalize(self, data: DashboardData) -> DashboardData:
        return dedupe_dashboard(data.with_title(self.forced_title))

    def _load_sample(self) -> DashboardData:
        return self._finalize(self.sample_factory())

    def load(self, silent: bool = False) -> AppState:
        if not self._lock.acquire(blocking=False):
            logger.warning("Load already in flight; ignoring concurrent request")
            return self._state
        try:
            self._state = begin_load(self._state, silent=silent)
            self._state = self._run(self._state, silent)
            return self._state
        finally:
            self._lock.release()

    def _run(self, state: AppState, silent: bool) -> AppState:
        if not self.has_endpoint:
            logger.warning("Apps Script URL not configured; using sample data")
            try:
                data = self._load_sample()
            except Exception as exc:  # the sample generator is the last resort
                logger.exception("Sample dataset failed to load")
                return load_failed(state, _error_text(exc), silent=silent)
            return load_succeeded(state, data, SOURCE_SAMPLE, MSG_NO_ENDPOINT, silent=silent)

        try:
            data = self._finalize(self.client.fetch_dashboard(self.url))
        except Exception as primary_exc:
            primary = _error_text(primary_exc)
            logger.warning("Primary load failed (%s); falling back to sample data", primary)
            try:
                data = self._load_sample()
            except Exception as fallback_exc:
                logger.exception("Sample fallback failed")
                message = MSG_BOTH_FAILED.format(primary=primary, fallback=_error_text(fallback_exc))
                return load_failed(state, message, silent=silent)
            return load_succeeded(
                state,
                data,
                SOURCE_SAMPLE,
                MSG_REMOTE_FAILED.format(error=primary),
                warning=primary,
                silent=silent,
            )

        logger.info("Dashboard loaded from Apps Script (%d sectors)", len(data.sectors))
        return load_succeeded(state, data, SOURCE_REMOTE, MSG_REMOTE_OK, silent=silent)
