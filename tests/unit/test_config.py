import pytest

from plikd_config.config import Settings
from plikd_config.loader import DEFAULT_CONFIG_PATH


def test_defaults():
    s = Settings()
    assert s.CONFIG == str(DEFAULT_CONFIG_PATH)
    assert s.LOG_JSON is False


def test_env_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PLIKD_CONFIG", "/etc/plikd.cfg")
    monkeypatch.setenv("PLIKD_LOG_JSON", "true")

    s = Settings()

    assert s.CONFIG == "/etc/plikd.cfg"
    assert s.LOG_JSON is True


def test_configuration_variables_are_ignored(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PLIKD_LISTEN_PORT", "9090")
    s = Settings()
    assert not hasattr(s, "LISTEN_PORT")
