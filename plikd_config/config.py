"""Process bootstrap settings using pydantic-settings.

These settings only tell the process where its configuration lives and how to
log while loading it; the plikd configuration itself is ``models.Configuration``.
Both are read from ``PLIKD_``-prefixed environment variables, e.g.
``PLIKD_CONFIG=/etc/plikd.cfg``.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from .loader import DEFAULT_CONFIG_PATH


class Settings(BaseSettings):
    """Bootstrap settings for the ``plikd-config`` command."""

    # Path of the TOML configuration source
    CONFIG: str = str(DEFAULT_CONFIG_PATH)

    # Logging before the configuration is known
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(env_prefix="PLIKD_", case_sensitive=False, extra="ignore")


__all__ = ["Settings"]
