"""``plikd-config`` command: load, override and print the configuration.

Exit status is 1 when the configuration cannot be assembled.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from .config import Settings
from .environment import environment_override
from .errors import ConfigurationError
from .loader import load_configuration
from .logging_config import configure_logging

_logger = logging.getLogger(__name__)


def _build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="plikd-config", description=__doc__)
    parser.add_argument("--config", default=settings.CONFIG, help="configuration file path")
    parser.add_argument(
        "--no-env", action="store_true", help="ignore PLIKD_* environment overrides"
    )
    parser.add_argument(
        "--public", action="store_true", help="print the client-visible settings as JSON"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = Settings()
    configure_logging("INFO", json_logs=settings.LOG_JSON)
    args = _build_parser(settings).parse_args(argv)

    try:
        config = load_configuration(args.config)
        if not args.no_env:
            environment_override(config)
    except ConfigurationError as exc:
        _logger.error("unable to load configuration: %s", exc)
        return 1

    configure_logging("DEBUG" if config.debug else config.log_level, json_logs=settings.LOG_JSON)

    if args.public:
        sys.stdout.write(json.dumps(config.public_view(), indent=2) + "\n")
    else:
        sys.stdout.write(config.dump() + "\n")
    return 0


def run() -> None:  # pragma: no cover
    sys.exit(main())


__all__ = ["main", "run"]
