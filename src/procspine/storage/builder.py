"""Storage builder protocol and row accessors.

A record type ships a ``Builder`` that maps it to and from the property bag
the row store consumes. Stores hand numbers back in whatever representation
they like (``int``, ``float``, ``Decimal``), so restore goes through the
coercing accessors here rather than trusting the type that was written.
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

from procspine.core.constants import EMPTY_STRING, INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN
from procspine.core.errors import ConstraintError, SchemaError
from procspine.storage.columns import columns_of

E = TypeVar("E")


@runtime_checkable
class StorageBuilder(Protocol[E]):
    """Maps a record type to and from a storage row."""

    def storage_to_entity(self, db_map: Mapping[str, Any]) -> E:
        ...

    def entity_to_storage(self, entity: E) -> dict[str, Any]:
        ...


def coerce_integral(value: Any, column: str) -> int:
    """Convert an integral number of any numeric type to ``int``; never truncates."""
    if isinstance(value, bool) or not isinstance(value, numbers.Number) or isinstance(value, complex):
        raise SchemaError(
            f"Column {column} is not numeric",
            field=column,
            value=value,
            constraint="numeric",
        )
    try:
        coerced = int(value)
    except (ValueError, OverflowError) as exc:
        raise SchemaError(f"Column {column} is not a finite number", field=column, value=value, cause=exc) from exc
    if coerced != value:
        raise SchemaError(f"Column {column} is not integral", field=column, value=value, constraint="integral")
    return coerced


def _as_integral(db_map: Mapping[str, Any], column: str, low: int, high: int) -> int:
    if column not in db_map or db_map[column] is None:
        raise SchemaError(f"Missing numeric column {column}", field=column)
    value = db_map[column]
    coerced = coerce_integral(value, column)
    if not low <= coerced <= high:
        raise SchemaError(
            f"Column {column} is out of range",
            field=column,
            value=value,
            constraint=f"{low}..{high}",
        )
    return coerced


def as_int(db_map: Mapping[str, Any], column: str) -> int:
    """Read a 32-bit integer column."""
    return _as_integral(db_map, column, INT32_MIN, INT32_MAX)


def as_long(db_map: Mapping[str, Any], column: str) -> int:
    """Read a 64-bit integer column."""
    return _as_integral(db_map, column, INT64_MIN, INT64_MAX)


def as_str(db_map: Mapping[str, Any], column: str, *, required: bool = True) -> str:
    """Read a string column. Optional columns read ``None``/absent as ``""``."""
    value = db_map.get(column)
    if value is None:
        if required:
            raise SchemaError(f"Missing string column {column}", field=column)
        return EMPTY_STRING
    if not isinstance(value, str):
        raise SchemaError(
            f"Column {column} is not a string",
            field=column,
            value=value,
            constraint="string",
        )
    return value


def check_column_lengths(db_map: Mapping[str, Any], model: Any) -> None:
    """Reject a row whose string values exceed their declared column length.

    Raises:
        ConstraintError: the first oversized column found
    """
    for col in columns_of(model).values():
        if col.length is None:
            continue
        value = db_map.get(col.name)
        if isinstance(value, str) and len(value) > col.length:
            raise ConstraintError(
                f"Column {col.name} exceeds length {col.length}",
                field=col.name,
                value=len(value),
                constraint=f"length<={col.length}",
            )
