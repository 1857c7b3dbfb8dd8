from datetime import datetime, timezone

from indicator_dashboard.data.client import RemoteDataClient
from indicator_dashboard.data.loader import (
    MSG_NO_ENDPOINT,
    MSG_REMOTE_OK,
    FallbackLoader,
    dedupe_by_id,
    dedupe_dashboard,
)
from indicator_dashboard.data.models import DashboardData, Indicator, Sector
from indicator_dashboard.data.sample import load_sample_dashboard
from indicator_dashboard.data.state import SOURCE_REMOTE, SOURCE_SAMPLE, LoadStatus

from conftest import FakeResponse, FakeSession

URL = "https://script.google.com/macros/s/abc/exec"


def _loader(session, **kwargs):
    return FallbackLoader(URL, client=RemoteDataClient(session=session), **kwargs)


def _broken_sample():
    raise RuntimeError("amostra indisponível")


def test_dedupe_by_id_keeps_first_and_drops_blank_ids():
    items = [Sector(id="a", name="A1"), Sector(id="", name="sem id"), Sector(id="a", name="A2"), Sector(id="b", name="B")]
    assert [item.name for item in dedupe_by_id(items)] == ["A1", "B"]


def test_dedupe_dashboard_handles_sectors_and_indicators():
    duplicated = Sector(
        id="s",
        name="S",
        indicators=(Indicator(id="i", name="first", value=1), Indicator(id="i", name="second", value=2)),
    )
    data = DashboardData(
        title="T",
        sectors=(duplicated, Sector(id="s", name="S again")),
        last_updated=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    result = dedupe_dashboard(data)
    assert len(result.sectors) == 1
    assert [indicator.name for indicator in result.sectors[0].indicators] == ["first"]


def test_remote_load_applies_forced_title_and_dedup(dashboard_payload):
    loader = _loader(FakeSession([FakeResponse(body=dashboard_payload)]), forced_title="Indicadores Seven")
    state = loader.load()

    assert state.status is LoadStatus.LOADED
    assert state.source == SOURCE_REMOTE
    assert state.source_message == MSG_REMOTE_OK
    assert state.data.title == "Indicadores Seven"
    assert [sector.id for sector in state.data.sectors] == ["comercial", "financeiro"]
    assert [i.name for i in state.data.sectors[0].indicators] == ["VENDA TG", "%TG"]


def test_unconfigured_url_uses_sample_without_network():
    session = FakeSession()
    loader = FallbackLoader("", client=RemoteDataClient(session=session))
    state = loader.load()

    assert session.calls == []
    assert state.status is LoadStatus.LOADED
    assert state.source == SOURCE_SAMPLE
    assert state.source_message == MSG_NO_ENDPOINT
    assert state.warning is None
    assert state.data.sectors


def test_http_failure_falls_back_to_sample_with_warning():
    session = FakeSession([FakeResponse(status_code=500, body={"error": "boom"})])
    state = _loader(session).load()

    assert state.status is LoadStatus.LOADED
    assert state.source == SOURCE_SAMPLE
    assert "boom" in state.warning
    assert "Exibindo dados de exemplo" in state.source_message


def test_both_failing_is_failed_with_combined_message(transport_error):
    loader = _loader(FakeSession([transport_error]), sample_factory=_broken_sample)
    state = loader.load()

    assert state.status is LoadStatus.FAILED
    assert state.data is None
    assert state.error.startswith("Primário: ")
    assert "connection refused" in state.error
    assert "Fallback: amostra indisponível" in state.error


def test_silent_reload_keeps_existing_data(dashboard_payload, transport_error):
    session = FakeSession([FakeResponse(body=dashboard_payload), transport_error])
    loader = _loader(session, sample_factory=_broken_sample)
    first = loader.load()

    state = loader.load(silent=True)
    assert state.status is LoadStatus.LOADED
    assert state.data == first.data
    assert state.source_message == MSG_REMOTE_OK
    assert "connection refused" in state.warning


def test_loud_reload_failure_clears_data(dashboard_payload, transport_error):
    session = FakeSession([FakeResponse(body=dashboard_payload), transport_error])
    loader = _loader(session, sample_factory=_broken_sample)
    loader.load()

    state = loader.load()
    assert state.status is LoadStatus.FAILED
    assert state.data is None


def test_concurrent_load_is_rejected():
    session = FakeSession()
    loader = FallbackLoader("", client=RemoteDataClient(session=session), sample_factory=load_sample_dashboard)
    before = loader.state

    loader._lock.acquire()
    try:
        assert loader.load() is before
    finally:
        loader._lock.release()
    assert loader.state.status is LoadStatus.IDLE
