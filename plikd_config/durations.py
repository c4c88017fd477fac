"""Human-readable TTL and size values.

TTL strings combine integer amounts with a unit, e.g. ``30d``, ``1h30m`` or
``90s``. A bare integer is a number of seconds and a leading ``-`` means
unbounded (any negative result is reported as ``-1``).
"""

from __future__ import annotations

import re
from typing import Final

from pydantic import ByteSize, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

_UNIT_SECONDS: Final = {"s": 1, "m": 60, "h": 3600, "d": 86400}
_TTL_PART: Final = re.compile(r"(\d+)([smhd])")

_byte_size_adapter: TypeAdapter[ByteSize] = TypeAdapter(ByteSize)


def parse_ttl(value: str) -> int:
    """Return ``value`` as a number of seconds (``-1`` for unbounded)."""
    text = value.strip().lower()
    if not text:
        raise ValueError("empty duration")
    negative = text.startswith("-")
    body = text.lstrip("+-")
    if body.isdigit():
        seconds = int(body)
    else:
        pos = 0
        seconds = 0
        for match in _TTL_PART.finditer(body):
            if match.start() != pos:
                break
            seconds += int(match.group(1)) * _UNIT_SECONDS[match.group(2)]
            pos = match.end()
        if pos == 0 or pos != len(body):
            raise ValueError(f"invalid duration {value!r}")
    if negative and seconds != 0:
        return -1
    return seconds


def parse_size(value: str) -> int:
    """Return a size such as ``10GB`` or ``512 MiB`` in bytes."""
    try:
        return int(_byte_size_adapter.validate_python(value.strip()))
    except PydanticValidationError as exc:
        raise ValueError(f"invalid size {value!r}") from exc


def format_ttl(seconds: int) -> str:
    if seconds < 0:
        return "unlimited"
    if seconds == 0:
        return "0s"
    parts = []
    for unit in ("d", "h", "m", "s"):
        amount, seconds = divmod(seconds, _UNIT_SECONDS[unit])
        if amount:
            parts.append(f"{amount}{unit}")
    return "".join(parts)


def format_size(size: int) -> str:
    return ByteSize(size).human_readable()


__all__ = ["parse_ttl", "parse_size", "format_ttl", "format_size"]
