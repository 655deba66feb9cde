"""
Tests for the enumeration engine.

These tests verify that:
1. Preconditions fail with their own error types
2. The level schedule respects the parent order
3. Joint-state weights are exact and sum to 1.0
4. Forced (deterministic) nodes never vary
"""

import numpy as np
import pytest

import network.classifier
from network import (
    BayesNet,
    CompiledBayesNet,
    CyclicNetworkError,
    DisconnectedNetworkError,
    DirectedGraph,
    EmptyNetworkError,
    MissingProbabilityError,
    ProbabilityMap,
    ProbabilityMassError,
    classify,
    compile_network,
    get_chain,
    get_general,
    get_tree,
    schedule_levels,
)

from conftest import classify_forest, make_net


# =============================================================================
# PRECONDITIONS
# =============================================================================

class TestPreconditions:

    def test_empty(self):
        with pytest.raises(EmptyNetworkError, match="empty"):
            BayesNet().classify()

    def test_disconnected(self):
        bn = make_net({"A": 0.3, "B": 0.7})
        with pytest.raises(DisconnectedNetworkError, match="not connected"):
            bn.classify()

    def test_cyclic(self):
        bn = make_net({"A": 0.5, "B": 0.5, "C": 0.5},
                      [("A", "B"), ("B", "C"), ("C", "A")])
        with pytest.raises(CyclicNetworkError, match="cycles"):
            bn.classify()

    def test_missing_probability(self):
        graph = DirectedGraph()
        graph.add_node("A")
        graph.add_node("B")
        graph.add_edge("A", "B")
        probs = ProbabilityMap()
        probs["A"] = 0.5
        with pytest.raises(MissingProbabilityError, match="B"):
            compile_network(graph, probs)


# =============================================================================
# SCHEDULE
# =============================================================================

class TestSchedule:

    def test_roots_first_sorted_by_name(self):
        bn = make_net({"B": 0.5, "A": 0.5, "C": 0.5}, [("B", "C"), ("A", "C")])
        net = bn.compile()
        levels = schedule_levels(net)
        assert [[net.names[i] for i in lvl] for lvl in levels] == [["A", "B"], ["C"]]

    def test_node_waits_for_all_parents(self):
        """D has parents on paths of different lengths; it is visited after E."""
        bn = make_net(
            {n: 0.5 for n in "ABCDE"},
            [("A", "B"), ("B", "D"), ("A", "C"), ("C", "E"), ("E", "D")],
        )
        net = bn.compile()
        levels = schedule_levels(net)
        assert [[net.names[i] for i in lvl] for lvl in levels] == [
            ["A"], ["B", "C"], ["E"], ["D"],
        ]

    def test_every_node_scheduled_once(self):
        net = get_general().compile()
        flat = [i for lvl in schedule_levels(net) for i in lvl]
        assert sorted(flat) == list(range(net.num_nodes))

    def test_result_node_order_follows_schedule(self):
        bn = make_net(
            {n: 0.5 for n in "ABCDE"},
            [("A", "B"), ("B", "D"), ("A", "C"), ("C", "E"), ("E", "D")],
        )
        assert bn.classify().nodes == ["A", "B", "C", "E", "D"]


# =============================================================================
# ENUMERATION
# =============================================================================

class TestEnumeration:

    def test_single_root(self):
        result = make_net({"A": 0.3}).classify()
        assert result.num_states == 2
        weights = {s.on: s.probability for s in result.states}
        assert weights[frozenset({"A"})] == pytest.approx(0.3)
        assert weights[frozenset()] == pytest.approx(0.7)

    @pytest.mark.parametrize("n", [1, 2, 4, 6])
    def test_independent_roots_give_2_pow_n_states(self, n):
        probs = {f"v{i}": 0.1 + 0.1 * i for i in range(n)}
        result = classify_forest(probs)
        assert result.num_states == 2 ** n
        assert result.total_probability() == pytest.approx(1.0, abs=1e-4)

    def test_two_independent_roots_example(self):
        result = classify_forest({"A": 0.3, "B": 0.7})
        weights = {s.on: s.probability for s in result.states}
        assert weights == {
            frozenset({"A", "B"}): pytest.approx(0.21),
            frozenset({"A"}): pytest.approx(0.09),
            frozenset({"B"}): pytest.approx(0.49),
            frozenset(): pytest.approx(0.21),
        }
        assert result.query({"A": True}, {"B": True}) == pytest.approx(0.3)

    def test_binary_counting_order(self):
        """Last node of a level flips fastest; all OFF comes first."""
        result = classify_forest({"A": 0.5, "B": 0.5})
        assert [sorted(s.on) for s in result.states] == [[], ["B"], ["A"], ["A", "B"]]

    def test_off_parent_forces_child_off(self, rain_wet):
        result = rain_wet.classify()
        assert result.num_states == 3
        for s in result.states:
            if not s.is_on("Rain"):
                assert not s.is_on("Wet")

    def test_chain_weights(self, rain_wet):
        weights = {s.on: s.probability for s in rain_wet.classify().states}
        assert weights == {
            frozenset(): pytest.approx(0.75),
            frozenset({"Rain"}): pytest.approx(0.125),
            frozenset({"Rain", "Wet"}): pytest.approx(0.125),
        }

    def test_zero_probability_node_is_always_off(self):
        bn = make_net({"A": 0.5, "Z": 0.0, "C": 0.4}, [("A", "Z"), ("A", "C")])
        result = bn.classify()
        assert all(not s.is_on("Z") for s in result.states)
        assert result.num_states == 3

    def test_one_probability_root_is_always_on(self):
        bn = make_net({"A": 1.0, "B": 0.4}, [("A", "B")])
        result = bn.classify()
        assert all(s.is_on("A") for s in result.states)
        assert result.num_states == 2

    def test_one_probability_child_follows_parents(self):
        bn = make_net({"A": 0.5, "B": 0.5, "C": 1.0}, [("A", "C"), ("B", "C")])
        result = bn.classify()
        assert result.num_states == 4
        for s in result.states:
            assert s.is_on("C") == (s.is_on("A") and s.is_on("B"))

    @pytest.mark.parametrize("factory", [get_chain, get_tree, get_general])
    @pytest.mark.parametrize("mode", ["easy", "medium", "hard"])
    def test_total_mass_is_one(self, factory, mode):
        result = factory(mode=mode, seed=7).classify()
        assert result.total_probability() == pytest.approx(1.0, abs=1e-4)

    def test_chain_state_count(self):
        """A chain of n varying nodes has n + 1 states: ON prefixes only."""
        result = get_chain(length=10).classify()
        assert result.num_states == 11

    def test_long_chain_does_not_recurse(self):
        bn = BayesNet()
        names = [f"n{i:04d}" for i in range(2000)]
        for n in names:
            bn.create_node(n, 1.0)
        for a, b in zip(names, names[1:]):
            bn.connect(a, b)
        result = bn.classify()
        assert result.num_states == 1
        assert result.states[0].on == frozenset(names)

    def test_classify_is_reentrant(self):
        net = get_general(seed=3).compile()
        first = classify(net)
        second = classify(net)
        assert first.render() == second.render()

    def test_elapsed_is_recorded(self, rain_wet):
        assert rain_wet.classify().elapsed > 0.0


class TestProbabilityMass:

    @staticmethod
    def single_node(p):
        return CompiledBayesNet(
            names=["A"],
            node_to_index={"A": 0},
            parents=[np.array([], dtype=np.int64)],
            children=[np.array([], dtype=np.int64)],
            p1=np.array([p], dtype=np.float64),
        )

    def test_nan_probability_is_rejected(self):
        """A NaN total must not slip past the tolerance check."""
        with pytest.raises(ProbabilityMassError, match="nan"):
            classify(self.single_node(np.nan))

    def test_missing_mass_is_rejected(self, monkeypatch):
        monkeypatch.setattr(
            network.classifier, "_enumerate_states",
            lambda net, levels: ([0, 1], [0.5, 0.4]),
        )
        with pytest.raises(ProbabilityMassError, match="not 1.0"):
            classify(self.single_node(0.4))

    def test_mass_within_tolerance_is_accepted(self, monkeypatch):
        monkeypatch.setattr(
            network.classifier, "_enumerate_states",
            lambda net, levels: ([0, 1], [0.6, 0.39995]),
        )
        assert classify(self.single_node(0.4)).num_states == 2
