"""JSON codec for the ``properties`` bag.

Properties are an open JSON object: agents add keys without a schema change,
and unknown keys are carried verbatim. Encoding is compact and keeps key
insertion order; comparison happens on decoded objects, never on strings.
``json`` keeps no shared state between calls, so the codec is safe to use
from any thread.
"""

from __future__ import annotations

import json
from typing import Any

from procspine.core.constants import EMPTY_STRING
from procspine.core.errors import ParseError, SchemaError
from procspine.core.logging import get_logger
from procspine.core.strings import is_empty

logger = get_logger(__name__)


def properties_to_json(properties: dict[str, Any] | None) -> str:
    """Encode properties; ``None`` becomes the empty string."""
    if properties is None:
        return EMPTY_STRING
    try:
        return json.dumps(properties, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError, RecursionError) as exc:
        raise SchemaError(
            "Properties are not JSON serializable",
            field="properties",
            cause=exc,
        ) from exc


def properties_from_json(text: str | None) -> dict[str, Any] | None:
    """Decode properties; an empty string means no properties (``None``).

    Raises:
        ParseError: malformed JSON, or JSON that is not an object
    """
    if is_empty(text):
        return None
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as exc:
        logger.warning("properties_parse_failed", error=str(exc), length=len(text))
        raise ParseError("Malformed properties JSON", cause=exc).with_context(
            column="properties"
        ) from exc
    if not isinstance(value, dict):
        logger.warning("properties_parse_failed", error="not a JSON object", length=len(text))
        raise ParseError(
            f"Properties must be a JSON object, got {type(value).__name__}"
        ).with_context(column="properties")
    return value
