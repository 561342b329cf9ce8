"""
Structured error types for Process Spine.

Record codecs sit at the edge between agents, peers and the row store, so
every failure they surface must tell the calling pipeline what went wrong
(bad JSON, wrong column type, oversized value) and whether retrying could
help. Instead of bare ``ValueError``/``KeyError``, procspine raises a small
typed hierarchy whose members carry:

- **Category:** What kind of error (parse, validation, config, ...)
- **Retryable:** Whether the operation can be retried automatically
- **Context:** Index name, entity ID, column and free-form metadata
- **Cause:** The chained underlying exception

Manifesto:
    - **Typed Error Hierarchy:** Restore failures, constraint violations and
      config mistakes are distinct types
    - **Explicit Retry Semantics:** Nothing here is retryable by default; the
      data has to change before the same call can succeed
    - **Error Chaining:** Original ``json``/``TypeError`` exceptions are kept
      as ``cause``

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                    ProcSpineError                         │
        │        (category, retryable, context, cause)              │
        ├──────────────────────────────────────────────────────────┤
        │                                                           │
        │  ParseError        ValidationError         ConfigError    │
        │  (PARSE)           (VALIDATION)            (CONFIG)       │
        │                         │                      │          │
        │                    SchemaError           InvalidConfig    │
        │                    ConstraintError                        │
        └──────────────────────────────────────────────────────────┘

Examples:
    Rejecting an oversized column value:

    >>> error = ConstraintError("name too long", field="name", constraint="length<=500")
    >>> error.retryable
    False
    >>> error.to_dict()["field"]
    'name'

    Chaining a JSON failure:

    >>> try:
    ...     json.loads("{")
    ... except json.JSONDecodeError as e:
    ...     raise ParseError("bad properties", cause=e)
    Traceback (most recent call last):
    ...
    ParseError: bad properties

Tags:
    error-handling, exception-hierarchy, error-context, procspine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        PARSE: Payload could not be decoded (malformed JSON)
        VALIDATION: Type mismatch or constraint violation
        CONFIG: Missing or invalid settings
        INTERNAL: Bugs, unexpected state
    """

    PARSE = "PARSE"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        index_name: Logical index of the record type (e.g. ``process_traffic``)
        entity_id: Logical ID of the record, when it could be computed
        column: Storage column or wire slot involved
        metadata: Additional key-value pairs
    """

    index_name: str | None = None
    entity_id: str | None = None
    column: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["index_name", "entity_id", "column"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ProcSpineError(Exception):
    """
    Base exception for all procspine errors.

    Subclasses set ``default_category`` and ``default_retryable`` so call
    sites only pass a message and whatever context they have.

    Examples:
        >>> error = ProcSpineError("unexpected state")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(index_name="process_traffic").context.index_name
        'process_traffic'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ProcSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ParseError("bad properties").with_context(
                index_name="process_traffic",
                column="properties",
            )
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# PARSE ERRORS
# =============================================================================


class ParseError(ProcSpineError):
    """A stored or forwarded payload could not be decoded."""

    default_category = ErrorCategory.PARSE


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ProcSpineError):
    """
    Data validation error.

    Never retryable - data must be fixed.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        if self.constraint:
            result["constraint"] = self.constraint
        return result


class SchemaError(ValidationError):
    """A column or slot holds a value of the wrong representation."""

    pass


class ConstraintError(ValidationError):
    """A value violates a declared length, width or non-empty constraint."""

    pass


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(ProcSpineError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ProcSpineError",
    "ParseError",
    "ValidationError",
    "SchemaError",
    "ConstraintError",
    "ConfigError",
    "InvalidConfigError",
]
