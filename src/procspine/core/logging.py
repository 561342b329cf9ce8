"""
Procspine Logging - structured logging for record pipelines.

Manifesto:
    Records cross three boundaries (agent reports, peer forwarding, row
    store). When one of them misbehaves the operator needs the index name,
    the logical ID and the column in a machine-readable line, not a
    formatted sentence. This module configures structlog once per process
    and hands out bound loggers.

Architecture:
    ::

        configure_logging(level="INFO", json_format=None, service="procspine")
            ↓
        structlog processor chain:
          1. TimeStamper (iso)
          2. add_log_level / add_logger_name
          3. add_service_metadata
          4. elasticsearch_compatible (JSON only)
          5. JSONRenderer (or ConsoleRenderer on a tty)

        logger = get_logger(__name__)
        logger.warning("last_ping_regressed", entity_id=..., previous=..., incoming=...)

Examples:
    >>> from procspine.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True, service="oap-peer-1")
    >>> get_logger(__name__).info("stream_registered", index_name="process_traffic")

Tags:
    logging, structlog, observability, procspine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from procspine.core.errors import InvalidConfigError

if TYPE_CHECKING:
    from procspine.core.settings import ProcSpineSettings


_SERVICE_NAME = "procspine"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _elasticsearch_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Make field names Elasticsearch/ECS compatible."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")
    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")
    return event_dict


def resolve_level(level: str) -> int:
    """Map a level name (any case) to its stdlib numeric value."""
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise InvalidConfigError("log_level", level)
    return value


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "procspine",
    add_timestamp: bool = True,
    cache_loggers: bool = True,
) -> None:
    """Configure structured logging for the process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
        cache_loggers: Cache bound loggers on first use (disable in tests)

    Raises:
        InvalidConfigError: ``level`` is not a known level name
    """
    global _SERVICE_NAME
    numeric_level = resolve_level(level)
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stdout.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        shared_processors.append(_elasticsearch_compatible)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )


def configure_from_settings(settings: ProcSpineSettings, **kwargs: Any) -> None:
    """Configure logging from a ``ProcSpineSettings`` instance."""
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        service=settings.service_name,
        **kwargs,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


__all__ = [
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "resolve_level",
]
