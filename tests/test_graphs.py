"""
Tests for the canned and random example networks.
"""

import numpy as np
import pytest

from network import (
    get_chain,
    get_general,
    get_tree,
    is_acyclic,
    network_to_script,
    random_layered_network,
)
from network.graphs import random_probability
from shell import Interpreter


class TestCannedNetworks:

    def test_structures(self):
        assert get_chain().children("C") == ["D"]
        assert get_tree().children("A") == ["B", "C"]
        assert get_general().parents("D") == ["C", "A"]

    def test_seed_is_deterministic(self):
        a = get_general(mode="medium", seed=11)
        b = get_general(mode="medium", seed=11)
        assert [a.probability(n) for n in a.nodes] == [b.probability(n) for n in b.nodes]

    @pytest.mark.parametrize("mode", ["easy", "medium", "hard", "logit"])
    def test_probabilities_in_range(self, mode):
        rng = np.random.default_rng(0)
        for _ in range(50):
            assert 0.0 <= random_probability(mode, rng) <= 1.0

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown mode"):
            random_probability("impossible")


class TestRandomLayeredNetwork:

    def test_acyclic(self):
        bn = random_layered_network(depth=5, width=6, edges=40, seed=1)
        assert is_acyclic(bn.nodes, bn.graph.children_map())
        assert len(bn) >= 5 * 4

    def test_fixed_probability(self):
        bn = random_layered_network(depth=3, edges=5, probability=0.5, seed=2)
        assert {bn.probability(n) for n in bn.nodes} == {0.5}

    def test_drawn_probability(self):
        bn = random_layered_network(depth=3, edges=5, probability=None, seed=2)
        assert len({bn.probability(n) for n in bn.nodes}) > 1

    def test_depth_validation(self):
        with pytest.raises(ValueError, match="depth"):
            random_layered_network(depth=1)

    def test_script_rebuilds_same_network(self):
        bn = random_layered_network(depth=4, edges=20, probability=None, seed=3)
        shell = Interpreter()
        shell.run(network_to_script(bn).splitlines())

        assert sorted(shell.net.nodes) == sorted(bn.nodes)
        for n in bn.nodes:
            assert shell.net.probability(n) == bn.probability(n)
            assert sorted(shell.net.children(n)) == sorted(bn.children(n))
