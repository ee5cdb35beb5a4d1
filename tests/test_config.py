import pytest
from starlette.testclient import TestClient

from app.config import Settings
from app.main import app


def test_default_settings_are_valid():
    Settings.validate()
    assert Settings.week_start_index() == 0


@pytest.mark.parametrize(
    "name, value",
    [("WEEK_START", "someday"), ("AVAILABILITY_MATCH", "partial")],
)
def test_invalid_calendar_setting_stops_startup(monkeypatch, name, value):
    monkeypatch.setattr(Settings, name, value)
    with pytest.raises(ValueError):
        with TestClient(app):
            pass
