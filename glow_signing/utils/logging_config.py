"""Structured logging configuration using structlog.

Logs go to stderr so that stdout stays clean for command output. Events
whose field names look sensitive are redacted before rendering.
"""

import logging
import logging.config
import sys
from typing import Any

import structlog

REDACTED = "***REDACTED***"

SENSITIVE_KEYS = (
    "password",
    "passwd",
    "secret",
    "token",
    "credential",
    "api_key",
    "private_key",
    "keypassword",
    "storepassword",
)

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def redact_sensitive_data(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Redact values of fields whose names suggest secrets.

    Args:
        logger: The logger instance
        method_name: The name of the called method
        event_dict: The event dictionary to process

    Returns:
        The event dictionary with sensitive values replaced
    """
    for key, value in event_dict.items():
        if key == "event":
            continue
        if any(pattern in key.lower() for pattern in SENSITIVE_KEYS):
            event_dict[key] = REDACTED
        elif isinstance(value, dict):
            event_dict[key] = redact_sensitive_data(logger, method_name, value)
    return event_dict


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Configure structlog and stdlib logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render JSON instead of human-readable console output

    Raises:
        ValueError: If an invalid logging level is provided
    """
    level = level.upper()
    if level not in VALID_LEVELS:
        raise ValueError(f"Invalid log level '{level}'. Must be one of: {', '.join(VALID_LEVELS)}")

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        redact_sensitive_data,
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {
                    "format": "%(message)s",
                },
            },
            "handlers": {
                "default": {
                    "level": level,
                    "class": "logging.StreamHandler",
                    "formatter": "plain",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "glow_signing": {
                    "handlers": ["default"],
                    "level": level,
                    "propagate": False,
                },
            },
        }
    )
