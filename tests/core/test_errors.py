"""Tests for procspine.core.errors module."""

import json

import pytest

from procspine.core.errors import (
    ConfigError,
    ConstraintError,
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    ParseError,
    ProcSpineError,
    SchemaError,
    ValidationError,
)


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_empty_context(self):
        """A fresh context carries nothing."""
        ctx = ErrorContext()
        assert ctx.index_name is None
        assert ctx.metadata == {}
        assert ctx.to_dict() == {}

    def test_to_dict_includes_set_fields(self):
        """to_dict includes only non-None fields plus metadata."""
        ctx = ErrorContext(index_name="process_traffic", column="layer", metadata={"row": 3})
        d = ctx.to_dict()
        assert d == {"index_name": "process_traffic", "column": "layer", "row": 3}
        assert "entity_id" not in d


class TestProcSpineError:
    """Test the base error class."""

    def test_defaults(self):
        """Base errors are INTERNAL and not retryable."""
        error = ProcSpineError("unexpected")
        assert error.message == "unexpected"
        assert error.category == ErrorCategory.INTERNAL
        assert error.retryable is False
        assert error.cause is None

    def test_with_context_known_and_unknown_keys(self):
        """Known keys set fields; unknown keys land in metadata."""
        error = ProcSpineError("failed").with_context(index_name="process_traffic", batch=7)
        assert error.context.index_name == "process_traffic"
        assert error.context.metadata["batch"] == 7

    def test_cause_is_chained(self):
        """cause is exposed and chained as __cause__."""
        cause = ValueError("boom")
        error = ProcSpineError("wrapped", cause=cause)
        assert error.cause is cause
        assert error.__cause__ is cause

    def test_to_dict(self):
        """to_dict carries type, category, context and cause."""
        error = ProcSpineError("failed", cause=KeyError("x")).with_context(column="name")
        d = error.to_dict()
        assert d["error_type"] == "ProcSpineError"
        assert d["category"] == "INTERNAL"
        assert d["context"] == {"column": "name"}
        assert "cause" in d

    def test_repr(self):
        """repr names the class and category."""
        assert repr(ParseError("bad")) == "ParseError('bad', category=PARSE)"


class TestSubclasses:
    """Test category defaults of the hierarchy."""

    def test_parse_error(self):
        """ParseError defaults to PARSE."""
        assert ParseError("x").category == ErrorCategory.PARSE

    def test_schema_and_constraint_are_validation(self):
        """Schema and constraint errors are validation errors."""
        assert isinstance(SchemaError("x"), ValidationError)
        assert isinstance(ConstraintError("x"), ValidationError)
        assert ConstraintError("x").category == ErrorCategory.VALIDATION

    def test_validation_to_dict_fields(self):
        """Validation errors serialize field, value and constraint."""
        error = ConstraintError("too long", field="name", value=501, constraint="length<=500")
        d = error.to_dict()
        assert d["field"] == "name"
        assert d["value"] == "501"
        assert d["constraint"] == "length<=500"

    def test_invalid_config(self):
        """InvalidConfigError keeps the key and formats the value."""
        error = InvalidConfigError("log_level", "LOUD")
        assert isinstance(error, ConfigError)
        assert error.key == "log_level"
        assert "LOUD" in error.message

    def test_raising_with_json_cause(self):
        """A JSON decode failure is chained as the cause."""
        with pytest.raises(ParseError) as exc_info:
            try:
                json.loads("{")
            except json.JSONDecodeError as e:
                raise ParseError("bad properties", cause=e) from e
        assert isinstance(exc_info.value.cause, json.JSONDecodeError)


class TestErrorCategory:
    """Test the category enum."""

    def test_members_match_hierarchy(self):
        """Every category is the default of some error class."""
        assert {c.value for c in ErrorCategory} == {"PARSE", "VALIDATION", "CONFIG", "INTERNAL"}
