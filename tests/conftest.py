from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from plikd_config.environment import ENV_PREFIX
from plikd_config.models import Configuration, new_configuration


@pytest.fixture(autouse=True)
def _clean_plikd_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    # Ensure isolation from PLIKD_* variables of the host environment
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def config() -> Configuration:
    return new_configuration()


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a TOML configuration file and return its path."""

    def _f(content: str, name: str = "plikd.cfg") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _f
