"""Base type of every record the metrics pipeline streams.

The aggregator holds one resident ``Metrics`` per logical ID and folds later
reports into it with ``combine``; at window close it asks for hour/day
rollups, runs ``calculate`` and evicts the resident to storage. Peers receive
copies through ``serialize``/``deserialize`` and pick a target by
``remote_hash_code``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from procspine.remote.data import RemoteData
from procspine.storage.columns import column

TIME_BUCKET = "time_bucket"


@dataclass(eq=False)
class Metrics(ABC):
    time_bucket: int = field(default=0, metadata=column(TIME_BUCKET))

    def id(self) -> str:
        """Logical ID of this record."""
        return self.id0()

    @abstractmethod
    def id0(self) -> str:
        ...

    @abstractmethod
    def combine(self, metrics: Metrics) -> bool:
        """Fold ``metrics`` into this resident; False means drop the resident."""

    @abstractmethod
    def calculate(self) -> None:
        ...

    @abstractmethod
    def to_hour(self) -> Metrics | None:
        ...

    @abstractmethod
    def to_day(self) -> Metrics | None:
        ...

    @abstractmethod
    def remote_hash_code(self) -> int:
        """Routing hash, identical on every peer for equal records."""

    @abstractmethod
    def serialize(self) -> RemoteData:
        ...

    @classmethod
    @abstractmethod
    def deserialize(cls, remote_data: RemoteData) -> Metrics:
        """Build a fresh, independently owned record from a wire tuple."""
