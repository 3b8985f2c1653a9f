"""
Logging configuration for structured logging.

This module configures JSON logging for the issuer tooling and for
applications that embed the license validator.
"""

import logging
import logging.config
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger
from opentelemetry import trace

from . import base


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds trace context."""

    def add_fields(self, log_record, record, message_dict):
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)

        span = trace.get_current_span()
        span_context = span.get_span_context()
        if span_context.is_valid:
            log_record["trace_id"] = format(span_context.trace_id, "032x")
            log_record["span_id"] = format(span_context.span_id, "016x")


def get_logging_config(
    environment: str = "development", log_file: Optional[str] = None
) -> dict:
    """
    Get logging configuration for the application.

    Args:
        environment: Environment name (development, production, test)
        log_file: Optional path of a rotating log file

    Returns:
        logging.config.dictConfig dictionary
    """
    if environment == "test":
        from . import test as env_settings

        log_level = env_settings.LOG_LEVEL
    else:
        env_settings = base
        if environment == base.ENVIRONMENT:
            log_level = base.LOG_LEVEL
        else:
            log_level = "DEBUG" if environment == "development" else "INFO"

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": sys.stdout,
        },
    }
    log_file = log_file or env_settings.LOG_FILE
    if log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "json",
            "filename": log_file,
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
        }
    handler_names = list(handlers)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
            "simple": {
                "format": "{levelname} {message}",
                "style": "{",
            },
        },
        "handlers": handlers,
        "root": {
            "handlers": handler_names,
            "level": "WARNING",
        },
        "loggers": {
            "core": {
                "handlers": handler_names,
                "level": log_level,
                "propagate": False,
            },
            "licenses": {
                "handlers": handler_names,
                "level": log_level,
                "propagate": False,
            },
        },
    }


def configure_logging(environment: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Apply the logging configuration.

    Args:
        environment: Environment name (defaults to LICENSING_ENVIRONMENT)
        log_file: Optional path of a rotating log file
    """
    logging.config.dictConfig(
        get_logging_config(environment or base.ENVIRONMENT, log_file=log_file)
    )
