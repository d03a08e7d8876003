"""Unit tests for module kinds."""

import pytest

from pulsesim.core.modules import (
    Broadcast,
    Conjunction,
    FlipFlop,
    Module,
    create_kind,
)
from pulsesim.core.pulses import HIGH, LOW


class TestBroadcast:
    """Tests for Broadcast."""

    def test_forwards_unchanged(self):
        kind = Broadcast()
        assert kind.receive(None, LOW) is LOW
        assert kind.receive("x", HIGH) is HIGH


class TestFlipFlop:
    """Tests for FlipFlop."""

    def test_starts_off(self):
        assert FlipFlop().state is False

    def test_low_toggles_and_emits_new_state(self):
        ff = FlipFlop()
        assert ff.receive("x", LOW) is True
        assert ff.state is True
        assert ff.receive("x", LOW) is False
        assert ff.state is False

    def test_high_is_discarded(self):
        ff = FlipFlop()
        assert ff.receive("x", HIGH) is None
        assert ff.state is False

        ff.receive("x", LOW)
        assert ff.receive("x", HIGH) is None
        assert ff.state is True

    @pytest.mark.parametrize("n_lows", [1, 2, 3, 4, 7, 10])
    def test_state_parity_ignores_interleaved_highs(self, n_lows):
        ff = FlipFlop()
        for i in range(n_lows):
            for _ in range(i % 3):
                ff.receive("x", HIGH)
            ff.receive("x", LOW)
            ff.receive("y", HIGH)

        assert ff.state is (n_lows % 2 == 1)

    def test_copy_is_independent(self):
        ff = FlipFlop()
        ff.receive("x", LOW)
        clone = ff.copy()
        clone.receive("x", LOW)
        assert ff.state is True
        assert clone.state is False


class TestConjunction:
    """Tests for Conjunction."""

    def test_with_inputs_all_low(self):
        conj = Conjunction.with_inputs(["x", "y"])
        assert conj.remembered == {"x": False, "y": False}
        assert conj.inputs == frozenset({"x", "y"})

    def test_all_high_emits_low(self):
        conj = Conjunction(remembered={"x": True, "y": True})
        assert conj.receive("x", HIGH) is LOW

    def test_any_low_emits_high(self):
        conj = Conjunction(remembered={"x": True, "y": True})
        assert conj.receive("y", LOW) is HIGH
        assert conj.remembered == {"x": True, "y": False}

        conj = Conjunction(remembered={"x": True, "y": True})
        assert conj.receive("x", LOW) is HIGH

    def test_memory_updated_for_every_pulse(self):
        conj = Conjunction.with_inputs(["x", "y"])
        conj.receive("x", HIGH)
        assert conj.remembered["x"] is True
        conj.receive("x", LOW)
        assert conj.remembered["x"] is False

    def test_empty_table_always_emits_low(self):
        conj = Conjunction()
        assert conj.receive(None, LOW) is LOW
        assert conj.receive(None, HIGH) is LOW
        assert conj.remembered == {}

    def test_unknown_source_rejected(self):
        conj = Conjunction.with_inputs(["x"])
        with pytest.raises(KeyError):
            conj.receive("intruder", HIGH)
        assert conj.inputs == frozenset({"x"})

    def test_copy_is_independent(self):
        conj = Conjunction.with_inputs(["x"])
        clone = conj.copy()
        clone.receive("x", HIGH)
        assert conj.remembered == {"x": False}
        assert clone.remembered == {"x": True}


class TestCreateKind:
    """Tests for the kind factory."""

    def test_markers(self):
        assert isinstance(create_kind(None), Broadcast)
        assert isinstance(create_kind(""), Broadcast)
        assert isinstance(create_kind("%"), FlipFlop)
        conj = create_kind("&", ["p", "q"])
        assert isinstance(conj, Conjunction)
        assert conj.inputs == frozenset({"p", "q"})

    def test_unknown_marker(self):
        with pytest.raises(ValueError):
            create_kind("!")


class TestModule:
    """Tests for Module."""

    def test_copy_keeps_destinations_and_copies_state(self):
        module = Module("a", FlipFlop(state=True), ("b", "c"))
        clone = module.copy()
        assert clone.destinations == ("b", "c")
        assert clone.kind is not module.kind
        assert clone.kind.state is True
