"""Unit tests for ModuleGraph and the text parser."""

import pytest

from pulsesim.core.graph import GraphBuildError, ModuleDeclaration, ModuleGraph
from pulsesim.core.modules import Broadcast, Conjunction, FlipFlop
from pulsesim.core.parser import load_graph, parse_graph, parse_modules
from pulsesim.core.scheduler import PulseScheduler


class TestBuild:
    """Tests for ModuleGraph.build."""

    def test_kinds_and_destinations(self, simple_graph):
        assert isinstance(simple_graph["broadcaster"].kind, Broadcast)
        assert isinstance(simple_graph["a"].kind, FlipFlop)
        assert isinstance(simple_graph["inv"].kind, Conjunction)
        assert simple_graph["broadcaster"].destinations == ("a", "b", "c")
        assert simple_graph.names == ["broadcaster", "a", "b", "c", "inv"]

    def test_accepts_plain_triples(self):
        graph = ModuleGraph.build([
            (None, "broadcaster", ["x"]),
            ("%", "x", ["y"]),
            ("&", "y", ["out"]),
        ])
        assert isinstance(graph["x"].kind, FlipFlop)
        assert graph["y"].kind.remembered == {"x": False}

    def test_sinks(self, feedback_graph):
        assert feedback_graph.sinks == frozenset({"output"})
        assert "output" not in feedback_graph
        assert feedback_graph.get("output") is None

    def test_conjunction_keys_equal_reverse_adjacency(self, two_counter_graph):
        graph = two_counter_graph
        for name in graph.names:
            kind = graph[name].kind
            if not isinstance(kind, Conjunction):
                continue
            sources = {src for src, dst in graph.edges() if dst == name}
            assert kind.inputs == frozenset(sources)
            assert set(graph.inputs_of(name)) == sources
            assert all(v is False for v in kind.remembered.values())

    def test_conjunction_keys_fixed_after_presses(self, two_counter_graph):
        before = {
            name: two_counter_graph[name].kind.inputs
            for name in two_counter_graph.names
            if isinstance(two_counter_graph[name].kind, Conjunction)
        }
        PulseScheduler().run(two_counter_graph, 50)
        for name, keys in before.items():
            assert two_counter_graph[name].kind.inputs == keys

    def test_conjunction_without_inputs_gets_empty_table(self):
        graph = parse_graph("broadcaster -> x\n&lonely -> x")
        assert graph["lonely"].kind.remembered == {}

    def test_inputs_in_declaration_order(self, feedback_graph):
        assert feedback_graph.inputs_of("con") == ("a", "b")
        assert feedback_graph.inputs_of("broadcaster") == ()

    def test_feeder_edges(self, two_counter_graph):
        assert two_counter_graph.feeder_edges("join") == [("hub", "join"), ("c1", "join")]

    def test_feeder_edges_requires_conjunction(self, two_counter_graph):
        with pytest.raises(ValueError):
            two_counter_graph.feeder_edges("b0")
        with pytest.raises(ValueError):
            two_counter_graph.feeder_edges("rx")


class TestBuildErrors:
    """Malformed declaration lists fail before any simulation."""

    def test_missing_broadcaster(self):
        with pytest.raises(GraphBuildError, match="broadcaster"):
            ModuleGraph.build([("%", "a", ["b"])])

    def test_broadcaster_with_marker(self):
        with pytest.raises(GraphBuildError, match="marker"):
            ModuleGraph.build([("%", "broadcaster", ["b"])])

    def test_duplicate_module(self):
        with pytest.raises(GraphBuildError, match="duplicate"):
            ModuleGraph.build([
                (None, "broadcaster", ["a"]),
                ("%", "a", ["b"]),
                ("&", "a", ["c"]),
            ])

    def test_unknown_marker(self):
        with pytest.raises(GraphBuildError, match="marker"):
            ModuleGraph.build([(None, "broadcaster", ["a"]), ("$", "a", ["b"])])

    def test_unhashable_marker(self):
        with pytest.raises(GraphBuildError, match="marker"):
            ModuleGraph.build([(None, "broadcaster", ["a"]), (["%"], "a", ["b"])])

    def test_no_destinations(self):
        with pytest.raises(GraphBuildError, match="no destinations"):
            ModuleGraph.build([(None, "broadcaster", [])])

    def test_bad_destination(self):
        with pytest.raises(GraphBuildError):
            ModuleGraph.build([(None, "broadcaster", ["a", ""])])

    def test_destinations_as_string(self):
        with pytest.raises(GraphBuildError):
            ModuleGraph.build([(None, "broadcaster", "a")])

    def test_not_a_triple(self):
        with pytest.raises(GraphBuildError):
            ModuleGraph.build([("broadcaster", ["a"])])

    def test_is_value_error(self):
        assert issubclass(GraphBuildError, ValueError)


class TestCopy:
    """Tests for ModuleGraph.copy."""

    def test_copy_shares_no_state(self, simple_graph):
        clone = simple_graph.copy()
        PulseScheduler().run(clone, 1)
        clone["a"].kind.state = True
        clone["inv"].kind.remembered["c"] = True

        assert simple_graph["a"].kind.state is False
        assert simple_graph["inv"].kind.remembered == {"c": False}

    def test_copy_preserves_current_state(self, simple_graph):
        simple_graph["b"].kind.state = True
        assert simple_graph.copy()["b"].kind.state is True


class TestParser:
    """Tests for the text format."""

    def test_parse_modules(self):
        decls = parse_modules("""
            broadcaster -> a, b
            %a -> b

            &b -> out
        """)
        assert decls == [
            ModuleDeclaration(None, "broadcaster", ("a", "b")),
            ModuleDeclaration("%", "a", ("b",)),
            ModuleDeclaration("&", "b", ("out",)),
        ]

    def test_bad_line_reports_line_number(self):
        with pytest.raises(GraphBuildError, match="line 2"):
            parse_modules("broadcaster -> a\n%a => b")

    def test_bad_destination_name(self):
        with pytest.raises(GraphBuildError, match="line 1"):
            parse_modules("broadcaster -> a, , b")

    def test_load_graph(self, tmp_path):
        path = tmp_path / "network.txt"
        path.write_text("broadcaster -> a\n%a -> out\n", encoding="utf-8")
        graph = load_graph(path)
        assert graph.names == ["broadcaster", "a"]
        assert graph.sinks == frozenset({"out"})

    def test_load_graph_missing_file(self, tmp_path):
        with pytest.raises(GraphBuildError, match="not found"):
            load_graph(tmp_path / "nope.txt")
