"""
Tests for ProcessTraffic identity: logical ID, equality, hashing.

Tests cover:
- Logical ID from (instance_id, name) only
- Equality and hash ignore every non-identity attribute
- Remote hash consistency across independently built records
- Metric base behavior (no rollups, no-op calculate)
"""

import pytest

from procspine.analysis.ids import ProcessID
from procspine.analysis.process.process_traffic import ProcessTraffic
from procspine.core.constants import ID_CONNECTOR
from procspine.core.errors import ConstraintError, SchemaError


class TestLogicalId:
    """Tests for the logical ID."""

    def test_first_report_id(self, make_traffic):
        """ID joins instance and name with the connector."""
        assert make_traffic().id() == f"instA{ID_CONNECTOR}nginx"

    def test_id_matches_process_id(self, make_traffic):
        """id() is ProcessID.build_id of the identity."""
        traffic = make_traffic(instance_id="i-9", name="java")
        assert traffic.id() == ProcessID.build_id("i-9", "java")

    def test_id_ignores_other_attributes(self, make_traffic):
        """Non-identity attributes never change the ID."""
        a = make_traffic(service_id="s1", layer=1, last_ping_timestamp=1)
        b = make_traffic(service_id="s2", layer=2, last_ping_timestamp=2, agent_id="a9")
        assert a.id() == b.id()

    def test_empty_identity_unaddressable(self):
        """An empty identity component cannot be addressed."""
        with pytest.raises(ConstraintError):
            ProcessTraffic(instance_id="", name="nginx").id()

    @pytest.mark.parametrize(
        "instance_id,name",
        [(f"i{ID_CONNECTOR}j", "n"), ("i", f"j{ID_CONNECTOR}n")],
    )
    def test_connector_in_identity_unaddressable(self, make_traffic, instance_id, name):
        """Identities that would alias another record have no ID or route."""
        traffic = make_traffic(instance_id=instance_id, name=name)
        with pytest.raises(ConstraintError):
            traffic.id()
        with pytest.raises(ConstraintError):
            traffic.remote_hash_code()


class TestEquality:
    """Tests for __eq__ and __hash__."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"service_id": "svcB"},
            {"layer": 4},
            {"agent_id": "a1"},
            {"properties": {"pid": 1}},
            {"detect_type": 2},
            {"last_ping_timestamp": 99},
            {"time_bucket": 20250101},
        ],
    )
    def test_non_identity_fields_ignored(self, make_traffic, overrides):
        """Equality and both hashes ignore non-identity fields."""
        a = make_traffic()
        b = make_traffic(**overrides)
        assert a == b
        assert hash(a) == hash(b)
        assert a.remote_hash_code() == b.remote_hash_code()

    @pytest.mark.parametrize("overrides", [{"instance_id": "instB"}, {"name": "redis"}])
    def test_identity_fields_distinguish(self, make_traffic, overrides):
        """Either identity field makes records unequal."""
        assert make_traffic() != make_traffic(**overrides)

    def test_not_equal_to_other_types(self, make_traffic):
        """Records never equal non-records."""
        assert make_traffic() != ("instA", "nginx")

    def test_usable_as_dict_key(self, make_traffic):
        """A later report finds the resident record by key."""
        resident = make_traffic(last_ping_timestamp=1)
        table = {resident: resident}
        assert table[make_traffic(last_ping_timestamp=2)] is resident


class TestRemoteHash:
    """Tests for remote_hash_code."""

    def test_independent_reports_route_together(self, make_traffic):
        """Reports of one process route to the same peer."""
        first = make_traffic(service_id="svcA", agent_id="a1", last_ping_timestamp=1000)
        second = ProcessTraffic(instance_id="instA", name="nginx", detect_type=2)
        assert first.remote_hash_code() == second.remote_hash_code()

    def test_is_signed_32_bit(self, make_traffic):
        """Routing hash is a signed 32-bit int."""
        value = make_traffic().remote_hash_code()
        assert isinstance(value, int)
        assert -(2**31) <= value < 2**31


class TestMetricBase:
    """Tests for metric base behavior."""

    def test_no_rollups(self, make_traffic):
        """Process records have no hour or day rollup."""
        traffic = make_traffic()
        assert traffic.to_hour() is None
        assert traffic.to_day() is None

    def test_calculate_is_noop(self, make_traffic, attributes):
        """calculate leaves every attribute unchanged."""
        traffic = make_traffic(properties={"pid": 1})
        before = attributes(traffic)
        traffic.calculate()
        assert attributes(traffic) == before


class TestDefaults:
    """Tests for construction defaults."""

    def test_defaults(self):
        """Unset attributes take their documented defaults."""
        traffic = ProcessTraffic(instance_id="instA", name="nginx")
        assert traffic.layer == 0
        assert traffic.detect_type == 0
        assert traffic.agent_id == ""
        assert traffic.properties is None
        assert traffic.time_bucket == 0

    def test_none_agent_id_normalized(self):
        """A None agent_id becomes the empty string."""
        assert ProcessTraffic(instance_id="i", name="n", agent_id=None).agent_id == ""

    def test_enum_values_stored_as_int(self):
        """Enum members are stored as plain ints."""
        from procspine.analysis.enums import Layer, ProcessDetectType

        traffic = ProcessTraffic(instance_id="i", name="n", layer=Layer.K8S, detect_type=ProcessDetectType.VM)
        assert type(traffic.layer) is int
        assert type(traffic.detect_type) is int
        assert traffic.layer == 4

    @pytest.mark.parametrize("overrides", [{"layer": 3.7}, {"detect_type": 1.5}, {"layer": "3"}])
    def test_non_integral_codes_rejected(self, make_traffic, overrides):
        """Codes are never truncated or parsed from text."""
        with pytest.raises(SchemaError):
            make_traffic(**overrides)

    def test_integral_float_codes_accepted(self, make_traffic):
        """An integral float code becomes the matching int."""
        traffic = make_traffic(layer=3.0, detect_type=2.0)
        assert (traffic.layer, traffic.detect_type) == (3, 2)
        assert type(traffic.layer) is int
