"""Unit tests for value propagation."""

from __future__ import annotations

import pytest
import structlog

from nodewire.config import Settings
from nodewire.exceptions import ConfigurationError, InvalidPropertyError, PropagationLimitError
from nodewire.graph import ConnectionGraph
from nodewire.models import (
    NAN_STRING,
    Connector,
    Node,
    Property,
    create_connector,
    create_distance_converter_node,
    create_input_node,
)
from nodewire.propagation import (
    DEFAULT_MAX_RIPPLE_DEPTH,
    DEFAULT_MAX_SETTER_CALLS,
    PropagationConfig,
    PropagationResult,
    collect_update_targets,
    propagate,
)


class Harness:
    """Minimal registry + graph to drive ``propagate`` directly."""

    def __init__(self, *nodes: Node) -> None:
        self.nodes = {node.id: node for node in nodes}
        self.graph = ConnectionGraph()

    def resolve(self, connector: Connector) -> Property:
        return self.nodes[connector.node_id].get_property(connector.prop_name)

    def read(self, connector: Connector) -> str:
        return self.resolve(connector).get()

    def run(self, origin: Connector, value: str, update_origin: bool = True, config=None):
        return propagate(self.graph, self.resolve, origin, value, update_origin, config)


class TestPropagationConfig:
    """Tests for PropagationConfig."""

    def test_default_values(self) -> None:
        config = PropagationConfig()
        assert config.max_ripple_depth == DEFAULT_MAX_RIPPLE_DEPTH
        assert config.max_setter_calls == DEFAULT_MAX_SETTER_CALLS

    def test_rejects_non_positive_bounds(self) -> None:
        with pytest.raises(ConfigurationError):
            PropagationConfig(max_ripple_depth=0)
        with pytest.raises(ConfigurationError):
            PropagationConfig(max_setter_calls=0)

    def test_from_settings(self) -> None:
        settings = Settings(_env_file=None, max_ripple_depth=7, max_setter_calls=99)
        config = PropagationConfig.from_settings(settings)
        assert config.max_ripple_depth == 7
        assert config.max_setter_calls == 99


class TestPropagationResult:
    """Tests for PropagationResult model."""

    def test_default_values(self) -> None:
        result = PropagationResult(origin="node_a.value")
        assert result.endpoints_updated == 0
        assert result.endpoints_skipped == 0
        assert result.ripples == 0
        assert result.max_depth == 0


class TestCollectUpdateTargets:
    """Tests for target ordering."""

    def test_origin_first_when_updated(self) -> None:
        a, b, c = (create_connector(f"node_{x}", "value") for x in "abc")
        graph = ConnectionGraph()
        graph.add_connection(a, b)
        graph.add_connection(b, c)
        assert collect_update_targets(graph, b, update_origin=True) == [b, a, c]
        assert collect_update_targets(graph, b, update_origin=False) == [a, c]

    def test_isolated_origin(self) -> None:
        a = create_connector("node_a", "value")
        assert collect_update_targets(ConnectionGraph(), a) == [a]
        assert collect_update_targets(ConnectionGraph(), a, update_origin=False) == []


class TestPropagate:
    """Tests for propagate."""

    def test_chain(self) -> None:
        nodes = [create_input_node(name=n, value=n) for n in ("a", "b", "c")]
        harness = Harness(*nodes)
        a, b, c = (create_connector(n.id, "value") for n in nodes)
        harness.graph.add_connection(a, b)
        harness.graph.add_connection(b, c)

        result = harness.run(a, "v")

        assert [harness.read(x) for x in (a, b, c)] == ["v", "v", "v"]
        assert result.endpoints_updated == 3
        assert result.ripples == 0
        assert result.max_depth == 0

    def test_without_origin(self) -> None:
        first, second = create_input_node(value="first"), create_input_node(value="second")
        harness = Harness(first, second)
        a, b = create_connector(first.id, "value"), create_connector(second.id, "value")
        harness.graph.add_connection(a, b)

        harness.run(a, "v", update_origin=False)

        assert harness.read(a) == "first"
        assert harness.read(b) == "v"

    def test_ripple_reaches_sibling_component(self) -> None:
        source = create_input_node(value="0")
        converter = create_distance_converter_node(name="converter")
        sink = create_input_node(value="")
        harness = Harness(source, converter, sink)
        src = create_connector(source.id, "value")
        conv_miles = create_connector(converter.id, "miles")
        conv_km = create_connector(converter.id, "km")
        dst = create_connector(sink.id, "value")
        harness.graph.add_connection(src, conv_miles)
        harness.graph.add_connection(conv_km, dst)

        result = harness.run(src, "10")

        assert harness.read(conv_miles) == "10"
        assert harness.read(dst) == harness.read(conv_km)
        assert harness.read(dst).startswith("16.09")
        assert result.ripples == 1
        assert result.max_depth == 1
        assert result.endpoints_updated == 3

    def test_poison_flows_back_to_writer(self) -> None:
        """An invalid write poisons the converter and everything wired to it."""
        source = create_input_node(value="10")
        converter = create_distance_converter_node(name="converter", miles="10")
        harness = Harness(source, converter)
        src = create_connector(source.id, "value")
        conv_miles = create_connector(converter.id, "miles")
        harness.graph.add_connection(src, conv_miles)

        result = harness.run(src, "hi")

        assert harness.read(src) == NAN_STRING
        assert harness.read(conv_miles) == NAN_STRING
        assert harness.read(create_connector(converter.id, "km")) == NAN_STRING
        assert result.ripples == 2

    def test_invalid_property(self) -> None:
        node = create_input_node()
        harness = Harness(node)
        with pytest.raises(InvalidPropertyError):
            harness.run(create_connector(node.id, "miles"), "1")

    def test_self_wired_converter_does_not_converge(self) -> None:
        converter = create_distance_converter_node(name="converter")
        harness = Harness(converter)
        miles = create_connector(converter.id, "miles")
        km = create_connector(converter.id, "km")
        harness.graph.add_connection(miles, km)

        with pytest.raises(PropagationLimitError) as exc_info:
            harness.run(miles, "1", config=PropagationConfig(max_ripple_depth=8))

        assert exc_info.value.limit_name == "max_ripple_depth"
        assert exc_info.value.limit == 8
        assert exc_info.value.origin_path == miles.path

    def test_cross_wired_converters_do_not_converge(self) -> None:
        first = create_distance_converter_node(name="first")
        second = create_distance_converter_node(name="second")
        harness = Harness(first, second)
        harness.graph.add_connection(
            create_connector(first.id, "km"), create_connector(second.id, "miles")
        )
        harness.graph.add_connection(
            create_connector(second.id, "km"), create_connector(first.id, "miles")
        )

        with pytest.raises(PropagationLimitError):
            harness.run(create_connector(first.id, "miles"), "1")

    def test_setter_call_limit(self) -> None:
        nodes = [create_input_node(value="old") for _ in range(5)]
        harness = Harness(*nodes)
        connectors = [create_connector(n.id, "value") for n in nodes]
        for left, right in zip(connectors, connectors[1:], strict=False):
            harness.graph.add_connection(left, right)

        with pytest.raises(PropagationLimitError) as exc_info:
            harness.run(connectors[0], "new", config=PropagationConfig(max_setter_calls=3))

        assert exc_info.value.limit_name == "max_setter_calls"
        assert [harness.read(c) for c in connectors] == ["new", "new", "new", "old", "old"]


class TestPoisonedComponents:
    """A poisoning ripple must leave every connected endpoint invalid."""

    def test_invalid_written_into_converter(self) -> None:
        peer = create_input_node(value="10")
        converter = create_distance_converter_node(name="converter", miles="10")
        harness = Harness(peer, converter)
        x = create_connector(peer.id, "value")
        conv_miles = create_connector(converter.id, "miles")
        harness.graph.add_connection(x, conv_miles)

        result = harness.run(conv_miles, "hi")

        assert harness.read(conv_miles) == NAN_STRING
        assert harness.read(create_connector(converter.id, "km")) == NAN_STRING
        assert harness.read(x) == NAN_STRING
        assert result.endpoints_skipped == 1

    def test_converter_mid_chain(self) -> None:
        first, last = create_input_node(value="a"), create_input_node(value="b")
        converter = create_distance_converter_node(name="converter", miles="10")
        harness = Harness(first, converter, last)
        a = create_connector(first.id, "value")
        conv_miles = create_connector(converter.id, "miles")
        b = create_connector(last.id, "value")
        harness.graph.add_connection(a, conv_miles)
        harness.graph.add_connection(conv_miles, b)

        harness.run(a, "hi")

        assert [harness.read(c) for c in (a, conv_miles, b)] == [NAN_STRING] * 3
        assert harness.read(create_connector(converter.id, "km")) == NAN_STRING

    def test_valid_value_mid_chain_reaches_far_end(self) -> None:
        """Ripples into a separate component do not stop the outer write."""
        first, last, km_peer = (create_input_node(value=v) for v in ("a", "b", "c"))
        converter = create_distance_converter_node(name="converter")
        harness = Harness(first, converter, last, km_peer)
        a = create_connector(first.id, "value")
        conv_miles = create_connector(converter.id, "miles")
        b = create_connector(last.id, "value")
        c = create_connector(km_peer.id, "value")
        harness.graph.add_connection(a, conv_miles)
        harness.graph.add_connection(conv_miles, b)
        harness.graph.add_connection(create_connector(converter.id, "km"), c)

        result = harness.run(a, "10")

        assert [harness.read(x) for x in (a, conv_miles, b)] == ["10", "10", "10"]
        assert harness.read(c).startswith("16.09")
        assert result.endpoints_skipped == 0
        assert result.endpoints_updated == 4

    def test_origin_context_released_after_limit(self) -> None:
        converter = create_distance_converter_node(name="converter")
        harness = Harness(converter)
        miles = create_connector(converter.id, "miles")
        harness.graph.add_connection(miles, create_connector(converter.id, "km"))

        with pytest.raises(PropagationLimitError):
            harness.run(miles, "1", config=PropagationConfig(max_ripple_depth=3))

        assert "propagation_origin" not in structlog.contextvars.get_contextvars()
