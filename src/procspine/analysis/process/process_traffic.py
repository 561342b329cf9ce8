"""
ProcessTraffic - liveness and identity of an OS process reported by agents.

Manifesto:
    A process is reported again and again, by one or more agents, to any
    peer of the backend. The record has to converge to one row per process
    no matter where reports land:

    - **Identity:** ``(instance_id, name)`` is the whole key; equality,
      in-process hash, logical ID and routing hash all derive from it
    - **Merge:** the first report fixes identity and static descriptors;
      later reports refresh liveness and fill in what was unknown, never
      blanking what was known
    - **Dual codec:** the storage row and the wire tuple carry the same
      attributes and restore the same record

Architecture:
    ::

        agent report ──► ProcessTraffic ──combine──► resident (aggregator)
                              │    ▲                     │
                    serialize │    │ deserialize         │ entity_to_storage
                              ▼    │                     ▼
                          RemoteData (peer)         storage row (store)
                                                         │ storage_to_entity
                                                         ▼
                                                    ProcessTraffic

    Wire slots::

        strings[0] service_id    integers[0] layer         longs[0] last_ping_timestamp
        strings[1] instance_id   integers[1] detect_type   longs[1] time_bucket
        strings[2] name
        strings[3] agent_id
        strings[4] properties JSON ("" when None)

Guardrails:
    - Not thread-safe: one owner at a time, the aggregator serializes
      ``combine`` per logical ID
    - ``last_ping_timestamp`` is overwritten even when the incoming value is
      older; a ``last_ping_regressed`` warning is logged when that happens
    - Codecs never truncate; oversized values are rejected by the storage
      layer (``check_column_lengths``)

Tags:
    procspine, process, metrics, merge, codec
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from procspine.analysis.enums import Layer, ProcessDetectType, ScopeDefine
from procspine.analysis.ids import ProcessID
from procspine.analysis.metrics import TIME_BUCKET, Metrics
from procspine.analysis.stream import metrics_extension, stream
from procspine.core.errors import ProcSpineError
from procspine.core.hashing import compute_remote_hash
from procspine.core.logging import get_logger
from procspine.core.strings import is_not_blank
from procspine.remote.data import RemoteData
from procspine.storage.builder import as_int, as_long, as_str, coerce_integral
from procspine.storage.columns import column
from procspine.storage.json_codec import properties_from_json, properties_to_json

logger = get_logger(__name__)

INDEX_NAME = "process_traffic"
SERVICE_ID = "service_id"
INSTANCE_ID = "instance_id"
NAME = "name"
LAYER = "layer"
AGENT_ID = "agent_id"
PROPERTIES = "properties"
LAST_PING_TIME_BUCKET = "last_ping"
DETECT_TYPE = "detect_type"


class PropertyUtil:
    """Well-known keys of the properties bag. Other keys are allowed."""

    HOST_IP = "host_ip"
    PID = "pid"
    COMMAND_LINE = "command_line"


@stream(name=INDEX_NAME, scope_id=ScopeDefine.PROCESS)
@metrics_extension(support_down_sampling=False, support_update=True)
@dataclass(eq=False)
class ProcessTraffic(Metrics):
    service_id: str = field(default="", metadata=column(SERVICE_ID))
    instance_id: str = field(default="", metadata=column(INSTANCE_ID, length=600))
    name: str = field(default="", metadata=column(NAME, length=500))
    layer: int = field(default=Layer.UNDEFINED.value, metadata=column(LAYER))
    agent_id: str = field(default="", metadata=column(AGENT_ID, length=500))
    properties: dict[str, Any] | None = field(
        default=None, metadata=column(PROPERTIES, length=50000, storage_only=True)
    )
    last_ping_timestamp: int = field(default=0, metadata=column(LAST_PING_TIME_BUCKET))
    detect_type: int = field(
        default=ProcessDetectType.UNDEFINED.value, metadata=column(DETECT_TYPE)
    )

    def __post_init__(self) -> None:
        if self.agent_id is None:
            self.agent_id = ""
        self.layer = coerce_integral(self.layer, LAYER)
        self.detect_type = coerce_integral(self.detect_type, DETECT_TYPE)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProcessTraffic):
            return NotImplemented
        return self.instance_id == other.instance_id and self.name == other.name

    def __hash__(self) -> int:
        return hash((self.instance_id, self.name))

    def id0(self) -> str:
        return ProcessID.build_id(self.instance_id, self.name)

    def combine(self, metrics: Metrics) -> bool:
        if not isinstance(metrics, ProcessTraffic):
            raise TypeError(f"Cannot combine ProcessTraffic with {type(metrics).__name__}")
        incoming = metrics
        if incoming.last_ping_timestamp < self.last_ping_timestamp:
            logger.warning(
                "last_ping_regressed",
                instance_id=self.instance_id,
                name=self.name,
                resident=self.last_ping_timestamp,
                incoming=incoming.last_ping_timestamp,
            )
        self.last_ping_timestamp = incoming.last_ping_timestamp
        if is_not_blank(incoming.agent_id):
            self.agent_id = incoming.agent_id
        if incoming.properties:
            self.properties = incoming.properties
        if incoming.detect_type > 0:
            self.detect_type = incoming.detect_type
        logger.debug(
            "process_traffic_combined",
            instance_id=self.instance_id,
            name=self.name,
            last_ping=self.last_ping_timestamp,
        )
        return True

    def calculate(self) -> None:
        pass

    def to_hour(self) -> Metrics | None:
        return None

    def to_day(self) -> Metrics | None:
        return None

    def remote_hash_code(self) -> int:
        return compute_remote_hash(self.id())

    def serialize(self) -> RemoteData:
        remote_data = RemoteData()
        remote_data.add_data_strings(self.service_id)
        remote_data.add_data_strings(self.instance_id)
        remote_data.add_data_strings(self.name)
        remote_data.add_data_strings(self.agent_id)
        remote_data.add_data_strings(properties_to_json(self.properties))

        remote_data.add_data_integers(self.layer)
        remote_data.add_data_integers(self.detect_type)

        remote_data.add_data_longs(self.last_ping_timestamp)
        remote_data.add_data_longs(self.time_bucket)
        return remote_data

    @classmethod
    def deserialize(cls, remote_data: RemoteData) -> ProcessTraffic:
        try:
            return cls(
                service_id=remote_data.get_data_strings(0),
                instance_id=remote_data.get_data_strings(1),
                name=remote_data.get_data_strings(2),
                agent_id=remote_data.get_data_strings(3),
                properties=properties_from_json(remote_data.get_data_strings(4)),
                layer=remote_data.get_data_integers(0),
                detect_type=remote_data.get_data_integers(1),
                last_ping_timestamp=remote_data.get_data_longs(0),
                time_bucket=remote_data.get_data_longs(1),
            )
        except ProcSpineError as exc:
            exc.with_context(index_name=INDEX_NAME)
            raise

    class Builder:
        """Maps ProcessTraffic to and from its ``process_traffic`` row."""

        def storage_to_entity(self, db_map: Mapping[str, Any]) -> ProcessTraffic:
            try:
                return ProcessTraffic(
                    service_id=as_str(db_map, SERVICE_ID),
                    instance_id=as_str(db_map, INSTANCE_ID),
                    name=as_str(db_map, NAME),
                    layer=as_int(db_map, LAYER),
                    agent_id=as_str(db_map, AGENT_ID, required=False),
                    properties=properties_from_json(as_str(db_map, PROPERTIES, required=False)),
                    last_ping_timestamp=as_long(db_map, LAST_PING_TIME_BUCKET),
                    detect_type=as_int(db_map, DETECT_TYPE),
                    time_bucket=as_long(db_map, TIME_BUCKET),
                )
            except ProcSpineError as exc:
                exc.with_context(index_name=INDEX_NAME)
                raise

        def entity_to_storage(self, entity: ProcessTraffic) -> dict[str, Any]:
            return {
                SERVICE_ID: entity.service_id,
                INSTANCE_ID: entity.instance_id,
                NAME: entity.name,
                LAYER: entity.layer,
                AGENT_ID: entity.agent_id,
                PROPERTIES: properties_to_json(entity.properties),
                LAST_PING_TIME_BUCKET: entity.last_ping_timestamp,
                DETECT_TYPE: entity.detect_type,
                TIME_BUCKET: entity.time_bucket,
            }
