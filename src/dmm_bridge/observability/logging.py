"""
dmm_bridge.observability.logging

Structured logging configuration for the bridge.

Responsibilities:
- Configure `structlog` for JSON logs on stdout (container friendly).
- Mask credential-looking fields before they reach the renderer.
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

# Keys whose values must never be rendered, wherever they appear in an event.
SECRET_KEYS = frozenset(
    {
        "authorization",
        "dmm_token",
        "token",
        "rd_access_token",
        "rd_client_secret",
        "rd_refresh_token",
        "rd_cast_token",
        "webhook_auth_header",
    }
)
REDACTED = "***"


def configure_logging(*, service_name: str, level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            redact_secrets,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def redact_secrets(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Replace values of `SECRET_KEYS` (top level and one dict level down)."""
    for key, value in list(event_dict.items()):
        if key.lower() in SECRET_KEYS:
            event_dict[key] = REDACTED
        elif isinstance(value, dict):
            event_dict[key] = {
                k: (REDACTED if str(k).lower() in SECRET_KEYS else v) for k, v in value.items()
            }
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Webhook payloads are logged at debug level; the redaction step keeps a stray
# header dump or settings dump from leaking debrid tokens into log storage.
