"""
Logger Implementation
=====================

structlog on top of stdlib logging. Events from both structlog loggers and
plain ``logging`` loggers (the neo4j driver, uvicorn) pass through the same
processor chain and renderer, so a production log stream is uniformly JSON.

Version: 0.1.0
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import EventDict, Processor


if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger


REDACTED = "***REDACTED***"

# Substring match on lowercased keys, so "neo4j_password" and "auth_token" hit
SENSITIVE_KEYS = frozenset(
    {
        "password",
        "secret",
        "token",
        "authorization",
        "credentials",
        "auth",
    }
)

# The driver logs every pooled connection at INFO
QUIET_LOGGERS = ("neo4j", "httpx", "httpcore", "asyncio")


def _service_context(service_name: str, version: str) -> Processor:
    """Processor stamping service name and version unless the event sets them."""

    def add_service_context(
        logger: logging.Logger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("version", version)
        return event_dict

    return add_service_context


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: REDACTED if _is_sensitive(key) else _redact(item)
            for key, item in value.items()
        }
    return value


def _is_sensitive(key: Any) -> bool:
    lowered = str(key).lower()
    return any(s in lowered for s in SENSITIVE_KEYS)


def _censor_secrets(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Replace values under secret-looking keys, at any nesting depth."""
    return _redact(event_dict)


def _shared_processors(service_name: str, version: str, json_logs: bool) -> list[Processor]:
    """Chain applied to structlog and foreign stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        _service_context(service_name, version),
        _censor_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.format_exc_info if json_logs else structlog.dev.set_exc_info,
    ]


def _renderer(json_logs: bool) -> Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(
            show_locals=False,
            max_frames=10,
        ),
    )


def _install_root_handler(formatter: logging.Formatter) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    service_name: str = "graph-gateway",
    version: str = "0.1.0",
) -> None:
    """
    Configure structlog and the root stdlib logger.

    Args:
        log_level: Logging level name, case-insensitive
        json_logs: JSON lines when True (production), coloured console otherwise
        service_name: Stamped on every event
        version: Stamped on every event
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors = _shared_processors(service_name, version, json_logs)

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _install_root_handler(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(json_logs),
            ],
        )
    )


def get_logger(name: str | None = None) -> "BoundLogger":
    """Structured logger for a module, usually ``get_logger(__name__)``."""
    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach key/values to every event logged from the current request task."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
