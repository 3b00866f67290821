"""
Structured logging for LeadDesk.
Every event carries service="leaddesk"; store and client modules log
event names with keyword fields (lead_id, email, error).
"""

import logging
import sys
from typing import Any
import structlog
from leaddesk.config import config

SERVICE_NAME = "leaddesk"

# Loggers that report each call to the scoring backend.
HTTP_CLIENT_LOGGERS = ("httpx", "httpcore", "urllib3")


def add_service_name(logger, method_name, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def log_format() -> str:
    """Renderer name: LOG_FORMAT when set to json or console, else console only in DEBUG."""
    if config.LOG_FORMAT in ("json", "console"):
        return config.LOG_FORMAT
    return "console" if config.DEBUG else "json"


def build_processors(fmt: str) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        add_service_name,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if fmt == "console":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())
    return processors


def configure_logging():
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    )
    for name in HTTP_CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=build_processors(log_format()),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = None) -> Any:
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.info("lead_added", lead_id=12, email="zed@x.com")
        logger.warning("remote_leads_fetch_failed", error="timeout")
    """
    return structlog.get_logger(name)


# Configure on module import
configure_logging()

logger = get_logger(SERVICE_NAME)
