"""Column descriptors attached to record fields.

Descriptors live in dataclass field metadata, so a record declares its
storage layout next to the attribute it describes::

    instance_id: str = field(default="", metadata=column("instance_id", length=600))

and the framework reads them back with ``columns_of(ProcessTraffic)``.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

COLUMN_METADATA_KEY = "procspine.column"


@dataclass(frozen=True)
class Column:
    """Storage column for one record attribute.

    ``length`` caps string values; ``None`` means the store's default.
    ``storage_only`` columns are persisted but never indexed or queried.
    """

    name: str
    length: int | None = None
    storage_only: bool = False


def column(name: str, *, length: int | None = None, storage_only: bool = False) -> dict[str, Any]:
    """Field metadata declaring a storage column."""
    return {COLUMN_METADATA_KEY: Column(name=name, length=length, storage_only=storage_only)}


def columns_of(model: Any) -> dict[str, Column]:
    """Map attribute name -> Column for every declared column of a record type or instance."""
    return {
        f.name: f.metadata[COLUMN_METADATA_KEY]
        for f in fields(model)
        if COLUMN_METADATA_KEY in f.metadata
    }
