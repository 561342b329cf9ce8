"""Logical ID construction and analysis.

A logical ID is the identity components joined by ``ID_CONNECTOR``. Empty
components and components containing the connector are rejected: either
would give two different identities the same ID.
"""

from __future__ import annotations

from dataclasses import dataclass

from procspine.core.constants import ID_CONNECTOR
from procspine.core.errors import ConstraintError, ValidationError
from procspine.core.strings import is_empty


@dataclass(frozen=True)
class ProcessIDDefinition:
    instance_id: str
    name: str


def _check_component(field: str, value: str) -> None:
    if is_empty(value):
        raise ConstraintError(
            f"Process {field} must not be empty",
            field=field,
            value=value,
            constraint="non-empty",
        )
    if ID_CONNECTOR in value:
        raise ConstraintError(
            f"Process {field} must not contain the ID connector",
            field=field,
            value=value,
            constraint="no ID_CONNECTOR",
        )


class ProcessID:
    """Builds and parses process IDs: ``<instance_id><ID_CONNECTOR><name>``."""

    @staticmethod
    def build_id(instance_id: str, name: str) -> str:
        _check_component("instance_id", instance_id)
        _check_component("name", name)
        return instance_id + ID_CONNECTOR + name

    @staticmethod
    def analyze_id(entity_id: str) -> ProcessIDDefinition:
        parts = entity_id.split(ID_CONNECTOR)
        if len(parts) != 2 or not all(parts):
            raise ValidationError(
                "Can't split process id into 2 non-empty parts",
                field="id",
                value=entity_id,
            )
        return ProcessIDDefinition(instance_id=parts[0], name=parts[1])
