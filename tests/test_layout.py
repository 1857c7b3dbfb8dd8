from indicator_dashboard.data.loader import MSG_REMOTE_OK
from indicator_dashboard.data.state import AppState, LoadStatus
from indicator_dashboard.ui.layout import banner_signature


def test_banner_signature_changes_when_a_warning_appears():
    loaded = AppState(status=LoadStatus.LOADED, source_message=MSG_REMOTE_OK)
    degraded = AppState(status=LoadStatus.LOADED, source_message=MSG_REMOTE_OK, warning="connection refused")

    assert banner_signature(loaded) == (MSG_REMOTE_OK, None)
    assert banner_signature(degraded) != banner_signature(loaded)


def test_banner_signature_is_stable_for_the_same_state():
    state = AppState(status=LoadStatus.LOADED, source_message=MSG_REMOTE_OK, warning="boom")
    assert banner_signature(state) == banner_signature(AppState(**vars(state)))
