"""Field identifier to environment variable name mapping.

Acronym runs stay single tokens:

    DebugRequests      -> DEBUG_REQUESTS
    DefaultTTL         -> DEFAULT_TTL
    GoogleAPIClientID  -> GOOGLE_API_CLIENT_ID
"""

from __future__ import annotations

import re
from typing import Final

# "APIClient" -> "API_Client": an upper-case run followed by a capitalized word
_ACRONYM_END: Final = re.compile(r"([A-Z]+)([A-Z][a-z])")
# "googleAPI" -> "google_API", "ipv6Enabled" -> "ipv6_Enabled"
_WORD_START: Final = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS: Final = re.compile(r"[^A-Za-z0-9]+")


def to_screaming_snake(name: str) -> str:
    """Return ``name`` as upper-case, underscore separated tokens."""
    s = _ACRONYM_END.sub(r"\1_\2", name)
    s = _WORD_START.sub(r"\1_\2", s)
    s = _SEPARATORS.sub("_", s)
    return s.strip("_").upper()


__all__ = ["to_screaming_snake"]
