"""Positional wire tuple exchanged between backend peers.

``RemoteData`` carries three parallel ordered lists: strings, 32-bit
integers and 64-bit longs. A record type owns the slot layout; the
transport only moves the lists. Values are immutable once added, so a
serialized payload is independent of the record it came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from procspine.core.constants import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN
from procspine.core.errors import ConstraintError, SchemaError


def _check_width(value: int, low: int, high: int, kind: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(f"Wire {kind} must be an int", value=value, constraint="int")
    if not low <= value <= high:
        raise ConstraintError(
            f"Wire {kind} out of range",
            value=value,
            constraint=f"{low}..{high}",
        )
    return value


@dataclass
class RemoteData:
    data_strings: list[str] = field(default_factory=list)
    data_integers: list[int] = field(default_factory=list)
    data_longs: list[int] = field(default_factory=list)

    def add_data_strings(self, value: str) -> RemoteData:
        if not isinstance(value, str):
            raise SchemaError("Wire string must be a str", value=value, constraint="string")
        self.data_strings.append(value)
        return self

    def add_data_integers(self, value: int) -> RemoteData:
        self.data_integers.append(_check_width(value, INT32_MIN, INT32_MAX, "integer"))
        return self

    def add_data_longs(self, value: int) -> RemoteData:
        self.data_longs.append(_check_width(value, INT64_MIN, INT64_MAX, "long"))
        return self

    def get_data_strings(self, index: int) -> str:
        return self._slot(self.data_strings, index, "strings")

    def get_data_integers(self, index: int) -> int:
        return self._slot(self.data_integers, index, "integers")

    def get_data_longs(self, index: int) -> int:
        return self._slot(self.data_longs, index, "longs")

    @staticmethod
    def _slot(values: list, index: int, kind: str):
        if not 0 <= index < len(values):
            raise SchemaError(
                f"Wire tuple has no {kind}[{index}]",
                field=f"{kind}[{index}]",
                constraint=f"size>{index}",
            )
        return values[index]
