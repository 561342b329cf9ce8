"""Stream registry for record types.

Manifesto:
    The surrounding framework creates tables, picks a storage builder and
    decides on downsampling from declarative metadata, without importing each
    record module by name. Record types declare that metadata with two
    decorators and land in a central registry keyed by index name.

Usage::

    @stream(name="process_traffic", scope_id=ScopeDefine.PROCESS)
    @metrics_extension(support_down_sampling=False, support_update=True)
    @dataclass(eq=False)
    class ProcessTraffic(Metrics):
        ...
        class Builder:
            ...

``builder`` defaults to the record's nested ``Builder`` class.

Tags:
    procspine, registry, stream, schema-metadata
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from procspine.core.logging import get_logger
from procspine.storage.columns import Column, columns_of

logger = get_logger(__name__)

T = TypeVar("T", bound=type)


@dataclass(frozen=True)
class StreamDefinition:
    name: str
    scope_id: int
    model: type
    builder: type
    support_down_sampling: bool
    support_update: bool
    columns: dict[str, Column]


_registry: dict[str, StreamDefinition] = {}


def metrics_extension(
    *, support_down_sampling: bool = True, support_update: bool = False
) -> Callable[[T], T]:
    """Decorator declaring rollup and update behavior of a metrics record."""

    def decorator(cls: T) -> T:
        cls.support_down_sampling = support_down_sampling
        cls.support_update = support_update
        return cls

    return decorator


def stream(*, name: str, scope_id: int, builder: type | None = None) -> Callable[[T], T]:
    """Decorator registering a record type under its index name."""

    def decorator(cls: T) -> T:
        if name in _registry:
            raise ValueError(f"Stream '{name}' is already registered")
        resolved_builder = builder or getattr(cls, "Builder", None)
        if resolved_builder is None:
            raise ValueError(f"Stream '{name}' has no storage builder")
        definition = StreamDefinition(
            name=name,
            scope_id=int(scope_id),
            model=cls,
            builder=resolved_builder,
            support_down_sampling=getattr(cls, "support_down_sampling", True),
            support_update=getattr(cls, "support_update", False),
            columns=columns_of(cls),
        )
        _registry[name] = definition
        cls.index_name = name
        cls.scope_id = definition.scope_id
        logger.debug(
            "stream_registered",
            index_name=name,
            scope_id=definition.scope_id,
            cls=cls.__name__,
            columns=len(definition.columns),
        )
        return cls

    return decorator


def get_stream(name: str) -> StreamDefinition:
    """Get a stream definition by index name."""
    if name not in _registry:
        available = ", ".join(sorted(_registry))
        raise KeyError(f"Stream '{name}' not found. Available: {available}")
    return _registry[name]


def list_streams() -> list[str]:
    """List all registered index names."""
    return sorted(_registry.keys())


def register_definition(definition: StreamDefinition) -> None:
    """Put a definition back into the registry (used to restore state after tests)."""
    _registry[definition.name] = definition


def clear_stream_registry() -> dict[str, Any]:
    """Clear the registry (for testing). Returns the removed definitions."""
    removed = dict(_registry)
    _registry.clear()
    return removed
