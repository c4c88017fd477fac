"""Server and download URL derivation."""

from __future__ import annotations

import ipaddress
from typing import Final
from urllib.parse import SplitResult, urlsplit, urlunsplit

_WILDCARD_ADDRESSES: Final = {"", "0.0.0.0", "::"}
_LOOPBACK: Final[str] = "127.0.0.1"

EMPTY_URL: Final = SplitResult(scheme="", netloc="", path="", query="", fragment="")


def _format_host(address: str) -> str:
    host = address.strip()
    if host in _WILDCARD_ADDRESSES:
        return _LOOPBACK
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return host
    if ip.version == 6:
        return f"[{ip.compressed}]"
    return host


def parse_absolute_url(value: str) -> SplitResult:
    """Parse ``value`` as an absolute URL.

    Raises ``ValueError`` when the scheme or host is missing or the port is not
    a valid number.
    """
    parts = urlsplit(value.strip())
    if not parts.scheme:
        raise ValueError("missing protocol scheme")
    if not parts.netloc or not parts.hostname:
        raise ValueError("missing host")
    # Accessing .port validates it (raises ValueError when out of range)
    parts.port
    return parts


def build_server_url(*, tls: bool, address: str, port: int, path: str = "") -> SplitResult:
    """Compose the externally reachable base URL of the server.

    Wildcard listen addresses resolve to the loopback address. Raises
    ``ValueError`` when the result is not a well-formed absolute URL.
    """
    if not 0 <= port <= 65535:
        raise ValueError(f"port {port} out of range")
    scheme = "https" if tls else "http"
    netloc = f"{_format_host(address)}:{port}"
    return parse_absolute_url(urlunsplit((scheme, netloc, path.rstrip("/"), "", "")))


__all__ = ["EMPTY_URL", "build_server_url", "parse_absolute_url"]
