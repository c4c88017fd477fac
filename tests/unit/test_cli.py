import json
import logging

import pytest

from plikd_config.cli import main


@pytest.fixture(autouse=True)
def reset_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def test_dump_default_configuration(capsys: pytest.CaptureFixture[str]):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Server URL : http://127.0.0.1:8080" in out


def test_public_view_is_json(write_config, capsys: pytest.CaptureFixture[str]):
    path = write_config('DownloadDomain = "https://dl.example.com"\n')
    assert main(["--config", str(path), "--public"]) == 0
    view = json.loads(capsys.readouterr().out)
    assert view["downloadDomain"] == "https://dl.example.com"


def test_environment_overrides_are_applied(
    write_config, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setenv("PLIKD_LISTEN_PORT", "9090")
    path = write_config("ListenPort = 8080\n")

    assert main(["--config", str(path)]) == 0
    assert "127.0.0.1:9090" in capsys.readouterr().out

    assert main(["--config", str(path), "--no-env"]) == 0
    assert "127.0.0.1:8080" in capsys.readouterr().out


def test_config_path_from_environment(
    write_config, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
):
    path = write_config("ListenPort = 7070\n")
    monkeypatch.setenv("PLIKD_CONFIG", str(path))
    assert main([]) == 0
    assert "127.0.0.1:7070" in capsys.readouterr().out


def test_missing_configuration_fails(tmp_path, capsys: pytest.CaptureFixture[str]):
    assert main(["--config", str(tmp_path / "missing.cfg")]) == 1
    assert capsys.readouterr().out == ""


def test_invalid_environment_fails(write_config, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PLIKD_MAX_TTL", "forever")
    assert main(["--config", str(write_config(""))]) == 1
