# bayes_net.py
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional

from .classifier import classify
from .compiled import CompiledBayesNet, compile_network
from .errors import SelfLoopError, UnknownNodeError
from .graph import DirectedGraph
from .probability import ProbabilityMap, check_probability
from .result import ClassificationResult

logger = logging.getLogger(__name__)


class ResultState(enum.Enum):
    FRESH = "fresh"
    STALE = "stale"


@dataclass(frozen=True)
class NodeInfo:
    name: str
    probability: Optional[float]
    parents: List[str]
    children: List[str]

    def __str__(self) -> str:
        return (
            f"\"{self.name}\", probability {self.probability}, "
            f"parents: <{', '.join(self.parents)}>, "
            f"children: <{', '.join(self.children)}>"
        )


class BayesNet:
    """
    Editable Bayes network of boolean variables with a cached classification.

    - A root node's probability is its prior.
    - A dependent node's probability is P(on | every parent on); any parent
      OFF forces it OFF.
    - Every mutation moves the cache to STALE. `result` re-classifies lazily;
      only a successful classification moves it back to FRESH. A failed run
      keeps the previous result around and leaves the state STALE.
    """

    def __init__(self) -> None:
        self._graph = DirectedGraph()
        self._probabilities = ProbabilityMap()
        self._state = ResultState.STALE
        self._result: Optional[ClassificationResult] = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> List[str]:
        return self._graph.nodes

    @property
    def graph(self) -> DirectedGraph:
        return self._graph

    @property
    def state(self) -> ResultState:
        return self._state

    @property
    def last_result(self) -> Optional[ClassificationResult]:
        """Most recent successful result, possibly stale. Never triggers work."""
        return self._result

    def __contains__(self, name: object) -> bool:
        return name in self._graph

    def __len__(self) -> int:
        return len(self._graph)

    def probability(self, name: str) -> float:
        return self._probabilities[name]

    def parents(self, name: str) -> List[str]:
        return self._graph.parents(name)

    def children(self, name: str) -> List[str]:
        return self._graph.children(name)

    def has_edge(self, tail: str, head: str) -> bool:
        return self._graph.has_edge(tail, head)

    def describe(self, name: str) -> NodeInfo:
        return NodeInfo(
            name=name,
            probability=self._probabilities.get(name),
            parents=self._graph.parents(name),
            children=self._graph.children(name),
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _invalidate(self) -> None:
        self._state = ResultState.STALE

    def create_node(self, name: str, probability: float) -> None:
        p = check_probability(probability)
        self._graph.add_node(name)
        self._probabilities[name] = p
        self._invalidate()
        logger.debug("Created node %s with probability %s.", name, p)

    def set_probability(self, name: str, probability: float) -> None:
        if name not in self._graph:
            raise UnknownNodeError(f"No node with name \"{name}\".")
        self._probabilities[name] = probability
        self._invalidate()
        logger.debug("Set probability of %s to %s.", name, self._probabilities[name])

    def delete_node(self, name: str) -> None:
        self._graph.remove_node(name)
        self._probabilities.remove(name)
        self._invalidate()
        logger.debug("Deleted node %s.", name)

    def connect(self, tail: str, head: str) -> bool:
        """Add the arc tail -> head. Returns False if it already existed."""
        if tail == head and tail in self._graph:
            raise SelfLoopError("Self-loops not allowed.")
        changed = self._graph.add_edge(tail, head)
        if changed:
            self._invalidate()
            logger.debug("Connected %s to %s.", tail, head)
        return changed

    def disconnect(self, tail: str, head: str) -> bool:
        """Remove the arc tail -> head. Returns False if there was none."""
        changed = self._graph.remove_edge(tail, head)
        if changed:
            self._invalidate()
            logger.debug("Disconnected %s from %s.", tail, head)
        return changed

    # ------------------------------------------------------------------
    # Inference
    # ------------------------------------------------------------------

    def compile(self) -> CompiledBayesNet:
        return compile_network(self._graph, self._probabilities)

    def classify(self) -> ClassificationResult:
        """
        Run a full classification and cache it. On failure the previous result
        stays cached and the exception propagates.
        """
        result = classify(self.compile())
        self._result = result
        self._state = ResultState.FRESH
        return result

    @property
    def result(self) -> ClassificationResult:
        if self._state is ResultState.STALE or self._result is None:
            return self.classify()
        return self._result

    def query(
        self,
        posteriori: Mapping[str, bool],
        apriori: Optional[Mapping[str, bool]] = None,
    ) -> float:
        return self.result.query(posteriori, apriori or {})

    def marginal(self, name: str) -> float:
        return self.result.marginal(name)
