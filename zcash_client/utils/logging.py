"""Logging configuration and utilities."""

import sys
import logging
import logging.handlers
from pathlib import Path
from typing import Any, MutableMapping, Optional, TextIO
import structlog
from structlog.stdlib import LoggerFactory

from zcash_client.models.config import ClientConfig

# Event keys whose values must never reach a log sink
SECRET_KEYS = frozenset({"password", "zcash_rpc_password", "authorization", "auth"})

REDACTED = "***"


def redact_secrets(logger: Any, method_name: str,
                   event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """structlog processor masking credential values."""
    for key in event_dict:
        if key.lower() in SECRET_KEYS:
            event_dict[key] = REDACTED
    return event_dict


def setup_logging(config: ClientConfig, stream: Optional[TextIO] = None) -> None:
    """
    Configure stdlib logging and structlog for the client.

    Records go to ``stream`` (stderr by default) so command output on stdout
    stays machine readable. urllib3 connection chatter is only shown at DEBUG.
    """
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.log_level}")

    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=stream or sys.stderr,
    )
    logging.getLogger().setLevel(level)
    logging.getLogger("urllib3").setLevel(logging.DEBUG if level <= logging.DEBUG
                                          else logging.WARNING)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        redact_secrets,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    if config.log_format.lower() == "json":
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=config.log_max_size_mb * 1024 * 1024,
            backupCount=config.log_backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        logging.getLogger().addHandler(file_handler)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
