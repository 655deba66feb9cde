# compiled.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from .connectivity import is_acyclic, reachable_undirected
from .errors import (
    CyclicNetworkError,
    DisconnectedNetworkError,
    EmptyNetworkError,
    MissingProbabilityError,
)
from .graph import DirectedGraph
from .probability import ProbabilityMap


@dataclass(frozen=True)
class CompiledBayesNet:
    """
    Index-based snapshot of a validated network.

    names: node names sorted lexicographically; index i <-> names[i], so
        sorting indices also sorts by name.
    parents[i], children[i]: int64 index arrays, in insertion order.
    p1: (N,) float64, P(node on | every parent on).
    """
    names: List[str]
    node_to_index: Dict[str, int]
    parents: List[np.ndarray]
    children: List[np.ndarray]
    p1: np.ndarray

    @property
    def num_nodes(self) -> int:
        return len(self.names)

    def roots(self) -> List[int]:
        return [i for i, ps in enumerate(self.parents) if ps.size == 0]

    def parent_mask(self, i: int) -> int:
        """Bitmask with one bit set per parent of node i."""
        mask = 0
        for p in self.parents[i]:
            mask |= 1 << int(p)
        return mask


def compile_network(
    graph: DirectedGraph,
    probabilities: ProbabilityMap,
    require_connected: bool = True,
) -> CompiledBayesNet:
    """
    Validate the network and freeze it into a CompiledBayesNet.

    Checks, in order: non-empty, weakly connected, acyclic, every node mapped
    to a probability. Each failure raises its own error type.

    require_connected=False skips the connectivity check; the enumeration
    itself handles several components (every root starts in level 0).
    """
    nodes = graph.nodes
    if not nodes:
        raise EmptyNetworkError("The input network is empty.")

    children = graph.children_map()
    parents = graph.parents_map()

    component = reachable_undirected(nodes[0], children, parents)
    if require_connected and len(component) != len(nodes):
        missing = sorted(set(nodes) - component)
        raise DisconnectedNetworkError(
            f"The graph is not connected: {missing} unreachable from \"{nodes[0]}\"."
        )

    if not is_acyclic(nodes, children):
        raise CyclicNetworkError("The input network contains cycles.")

    unmapped = [n for n in nodes if n not in probabilities]
    if unmapped:
        raise MissingProbabilityError(
            f"Nodes not mapped in the probability map: {sorted(unmapped)}"
        )

    names = sorted(nodes)
    name_to_idx = {n: i for i, n in enumerate(names)}

    return CompiledBayesNet(
        names=names,
        node_to_index=name_to_idx,
        parents=[np.array([name_to_idx[p] for p in parents[n]], dtype=np.int64) for n in names],
        children=[np.array([name_to_idx[c] for c in children[n]], dtype=np.int64) for n in names],
        p1=np.array([probabilities[n] for n in names], dtype=np.float64),
    )
