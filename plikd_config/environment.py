"""Environment variable overrides.

Each configuration field can be overridden by a variable named after the
field's external identifier, prefixed with ``PLIKD_``:

    ListenPort        -> PLIKD_LISTEN_PORT
    GoogleAPIClientID -> PLIKD_GOOGLE_API_CLIENT_ID

Values are coerced to the field type: booleans and integers are parsed as
text, strings are used verbatim, lists and mappings are JSON literals, e.g.
``PLIKD_UPLOAD_WHITELIST='["127.0.0.1"]'``.

Overrides are applied in field order and are not rolled back when a later
variable fails to coerce.
"""

from __future__ import annotations

import logging
import os
import re
import typing
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Final, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import CoercionError
from .models import Configuration
from .naming import to_screaming_snake

_logger = logging.getLogger(__name__)

ENV_PREFIX: Final[str] = "PLIKD_"

_JSON_ORIGINS: Final = (list, dict)
_BASE10_INT: Final = re.compile(r"[+-]?[0-9]+")

# An override of the numeric value must not be replaced by the string form on validation
_HUMAN_READABLE_FORMS: Final = {
    "max_file_size": "max_file_size_str",
    "default_ttl": "default_ttl_str",
    "max_ttl": "max_ttl_str",
}


def env_var_name(field_name: str) -> str:
    """Environment variable overriding the field ``field_name`` (attribute or alias)."""
    field = Configuration.model_fields.get(field_name)
    identifier = field.alias if field is not None and field.alias else field_name
    return ENV_PREFIX + to_screaming_snake(identifier)


@lru_cache(maxsize=None)
def _adapter(annotation: Any) -> TypeAdapter[Any]:
    return TypeAdapter(annotation)


def _describe(annotation: Any) -> str:
    origin = typing.get_origin(annotation)
    if origin is list:
        return "JSON array of strings"
    if origin is dict:
        return "JSON object"
    return getattr(annotation, "__name__", str(annotation))


def coerce_value(annotation: Any, raw: str) -> Any:
    """Convert the text ``raw`` into a value of type ``annotation``.

    Raises ``ValueError`` when the text cannot be converted.
    """
    adapter = _adapter(annotation)
    try:
        if typing.get_origin(annotation) in _JSON_ORIGINS:
            return adapter.validate_json(raw)
        if annotation is str:
            return raw
        if annotation is int and not _BASE10_INT.fullmatch(raw):
            raise ValueError(f"{raw!r} is not a base-10 integer")
        return adapter.validate_python(raw.strip())
    except PydanticValidationError as exc:
        raise ValueError(str(exc)) from exc


def apply_environment(config: Configuration, environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Overwrite fields of ``config`` from ``environ`` without validating.

    Returns the names of the variables that were applied. Raises
    ``CoercionError`` on the first value that cannot be converted.
    """
    env = os.environ if environ is None else environ
    applied: list[str] = []
    known: set[str] = set()
    for name, field in Configuration.model_fields.items():
        variable = env_var_name(name)
        known.add(variable)
        raw = env.get(variable)
        if raw is None:
            continue
        try:
            value = coerce_value(field.annotation, raw)
        except ValueError as exc:
            raise CoercionError(variable, raw, _describe(field.annotation)) from exc
        setattr(config, name, value)
        if name in _HUMAN_READABLE_FORMS and env_var_name(_HUMAN_READABLE_FORMS[name]) not in env:
            setattr(config, _HUMAN_READABLE_FORMS[name], "")
        applied.append(variable)

    unknown = sorted(k for k in env if k.startswith(ENV_PREFIX) and k not in known)
    if unknown:
        _logger.debug("environment variables not mapped to a field", extra={"variables": unknown})
    if applied:
        _logger.info("applied environment overrides", extra={"variables": applied})
    return applied


def environment_override(config: Configuration, environ: Optional[Mapping[str, str]] = None) -> None:
    """Apply environment overrides to ``config`` then validate it again.

    A conversion failure raises ``CoercionError``; a resulting configuration
    that does not validate raises ``ConfigValidationError``.
    """
    apply_environment(config, environ)
    config.initialize()


__all__ = [
    "ENV_PREFIX",
    "env_var_name",
    "coerce_value",
    "apply_environment",
    "environment_override",
]
