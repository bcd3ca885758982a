import pytest

from routeplanner.config import settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    # no real pacing or external services unless a test opts in
    monkeypatch.setattr(settings, "geocode_delay_seconds", 0.0)
    monkeypatch.setattr(settings, "directions_delay_seconds", 0.0)
    monkeypatch.setattr(settings, "osrm_base_url", None)
    monkeypatch.setattr(settings, "osrm_backoff_seconds", 0.0)
    yield
