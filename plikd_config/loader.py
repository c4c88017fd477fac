"""Configuration loading from a TOML source file."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Final, Union

from pydantic import ValidationError as PydanticValidationError

from .errors import DecodeError, SourceUnavailableError
from .models import Configuration

_logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH: Final[Path] = Path(__file__).resolve().parent / "plikd.cfg"

SourceReader = Callable[[Path], Mapping[str, Any]]


def read_toml_source(path: Path) -> dict[str, Any]:
    """Decode a TOML file into a flat attribute mapping."""
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise SourceUnavailableError(str(path), exc.strerror or str(exc)) from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(str(path), str(exc)) from exc


def _known_keys() -> set[str]:
    keys: set[str] = set()
    for name, field in Configuration.model_fields.items():
        keys.add(name)
        if field.alias:
            keys.add(field.alias)
    return keys


def load_configuration(
    path: Union[str, Path] = DEFAULT_CONFIG_PATH,
    *,
    reader: SourceReader = read_toml_source,
) -> Configuration:
    """Load, default and validate the configuration stored at ``path``.

    Keys absent from the source keep their default value. Returns only a fully
    validated configuration; every failure raises a ``ConfigurationError``.
    """
    source = Path(path)
    data = reader(source)

    unknown = sorted(set(data) - _known_keys())
    if unknown:
        _logger.warning("ignoring unknown configuration keys", extra={"keys": unknown})

    try:
        config = Configuration.model_validate(data)
    except PydanticValidationError as exc:
        raise DecodeError(str(source), str(exc)) from exc

    config.initialize()
    _logger.info("configuration loaded", extra={"source": str(source)})
    return config


__all__ = ["DEFAULT_CONFIG_PATH", "SourceReader", "read_toml_source", "load_configuration"]
