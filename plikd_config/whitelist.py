"""Upload whitelist compilation and membership tests.

Entries are either CIDR blocks (``127.0.0.0/24``, ``1234::/64``) or bare
addresses, which compile to a single-host network (/32 or /128). Host bits in a
CIDR entry are masked off, so ``127.0.0.10/24`` compiles to ``127.0.0.0/24``.
"""

from __future__ import annotations

import ipaddress
import logging
from typing import Iterable, Optional, Sequence, Union

from .errors import ConfigValidationError

_logger = logging.getLogger(__name__)

IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]
IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def parse_whitelist_entry(entry: str) -> IPNetwork:
    """Parse a single whitelist entry into a network.

    Raises ``ConfigValidationError`` naming the entry when it is neither a CIDR
    block nor an IP address.
    """
    text = (entry or "").strip()
    try:
        if "/" in text:
            return ipaddress.ip_network(text, strict=False)
        return ipaddress.ip_network(ipaddress.ip_address(text))
    except ValueError as exc:
        raise ConfigValidationError(
            f"invalid upload whitelist entry {entry!r}: {exc}",
            field="UploadWhitelist",
            value=entry,
        ) from exc


def compile_whitelist(entries: Iterable[str]) -> list[IPNetwork]:
    """Compile whitelist entries in order; the first malformed entry aborts."""
    networks = [parse_whitelist_entry(e) for e in entries]
    if networks:
        _logger.debug("compiled upload whitelist", extra={"networks": [str(n) for n in networks]})
    return networks


def _coerce_address(address: Union[str, IPAddress, None]) -> Optional[IPAddress]:
    if address is None:
        return None
    if isinstance(address, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        ip = address
    elif isinstance(address, str):
        text = address.strip()
        if not text:
            return None
        try:
            ip = ipaddress.ip_address(text)
        except ValueError:
            return None
    else:
        return None
    # Clients reaching a dual-stack socket show up as ::ffff:a.b.c.d
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


def is_whitelisted(networks: Sequence[IPNetwork], address: Union[str, IPAddress, None]) -> bool:
    """Return whether ``address`` may upload.

    An empty whitelist allows everything, including a missing address. With a
    non-empty whitelist a missing or unparsable address is rejected. Never
    raises.
    """
    if not networks:
        return True
    ip = _coerce_address(address)
    if ip is None:
        return False
    return any(ip.version == net.version and ip in net for net in networks)


__all__ = [
    "IPNetwork",
    "IPAddress",
    "parse_whitelist_entry",
    "compile_whitelist",
    "is_whitelisted",
]
