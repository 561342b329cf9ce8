"""
Shared pytest fixtures for procspine tests.

This module provides:
- A ProcessTraffic factory with first-report defaults
- An attribute snapshot helper for whole-record comparisons
- structlog reset between tests
"""

from dataclasses import fields
from typing import Any, Callable

import pytest
import structlog

from procspine.analysis.process.process_traffic import ProcessTraffic


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any logging configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_traffic() -> Callable[..., ProcessTraffic]:
    """Build a ProcessTraffic, overriding any attribute by keyword."""

    def _make(**overrides: Any) -> ProcessTraffic:
        values: dict[str, Any] = {
            "service_id": "svcA",
            "instance_id": "instA",
            "name": "nginx",
            "layer": 3,
            "agent_id": "",
            "detect_type": 0,
            "properties": None,
            "last_ping_timestamp": 1000,
            "time_bucket": 20240101,
        }
        values.update(overrides)
        return ProcessTraffic(**values)

    return _make


@pytest.fixture
def attributes() -> Callable[[ProcessTraffic], dict[str, Any]]:
    """Snapshot every attribute of a record (equality only looks at identity)."""

    def _attributes(traffic: ProcessTraffic) -> dict[str, Any]:
        return {f.name: getattr(traffic, f.name) for f in fields(traffic)}

    return _attributes
