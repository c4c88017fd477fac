"""Top-level package for plikd-config.

Exports the configuration model, its construction pipeline and the centralized
logging configuration.
"""

from .environment import ENV_PREFIX, environment_override
from .errors import (
    CoercionError,
    ConfigurationError,
    ConfigValidationError,
    DecodeError,
    SourceUnavailableError,
)
from .loader import DEFAULT_CONFIG_PATH, load_configuration
from .logging_config import configure_logging
from .models import Configuration, new_configuration

__all__ = [
    "Configuration",
    "new_configuration",
    "load_configuration",
    "environment_override",
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "ConfigurationError",
    "SourceUnavailableError",
    "DecodeError",
    "CoercionError",
    "ConfigValidationError",
    "configure_logging",
]
