# result.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Mapping, Sequence

import numpy as np

from .errors import OverlappingLiteralsError, UnknownVariableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SystemState:
    """One complete ON/OFF assignment. Nodes not in `on` are OFF."""
    on: FrozenSet[str]
    probability: float

    def is_on(self, name: str) -> bool:
        return name in self.on


class ClassificationResult:
    """
    Joint distribution produced by one classification run.

    - nodes: ordered variable list, in the order the enumeration first met them.
    - table: (S, N) bool, table[s, i] is the value of nodes[i] in state s.
    - weights: (S,) float64, probability of each state.
    """

    def __init__(
        self,
        nodes: Sequence[str],
        table: np.ndarray,
        weights: np.ndarray,
        elapsed: float = 0.0,
    ) -> None:
        table = np.asarray(table, dtype=bool).reshape(-1, len(nodes))
        weights = np.asarray(weights, dtype=np.float64).reshape(-1)
        if table.shape[0] != weights.shape[0]:
            raise ValueError(
                f"State table has {table.shape[0]} rows but {weights.shape[0]} weights."
            )

        self._nodes: List[str] = list(nodes)
        self._index: Dict[str, int] = {n: i for i, n in enumerate(self._nodes)}
        self._table = table
        self._weights = weights
        self.elapsed = float(elapsed)

    @classmethod
    def from_masks(
        cls,
        nodes: Sequence[str],
        node_bits: Sequence[int],
        masks: Sequence[int],
        weights: Sequence[float],
        elapsed: float = 0.0,
    ) -> "ClassificationResult":
        """
        Build from integer ON-bitmasks. node_bits[i] is the bit position that
        stores nodes[i] in each mask.
        """
        table = np.zeros((len(masks), len(nodes)), dtype=bool)
        for s, mask in enumerate(masks):
            for i, bit in enumerate(node_bits):
                table[s, i] = (mask >> bit) & 1
        return cls(nodes, table, np.asarray(weights, dtype=np.float64), elapsed)

    @property
    def nodes(self) -> List[str]:
        return list(self._nodes)

    @property
    def num_states(self) -> int:
        return int(self._weights.shape[0])

    def __len__(self) -> int:
        return self.num_states

    @property
    def table(self) -> np.ndarray:
        return self._table.copy()

    @property
    def weights(self) -> np.ndarray:
        return self._weights.copy()

    @property
    def states(self) -> List[SystemState]:
        return [
            SystemState(
                on=frozenset(n for n, v in zip(self._nodes, row) if v),
                probability=float(w),
            )
            for row, w in zip(self._table, self._weights)
        ]

    def total_probability(self) -> float:
        return float(self._weights.sum())

    def _consistent(self, literals: Mapping[str, bool]) -> np.ndarray:
        """Boolean mask (S,) of states that agree with every literal."""
        mask = np.ones(self.num_states, dtype=bool)
        for name, value in literals.items():
            mask &= self._table[:, self._index[name]] == bool(value)
        return mask

    def _check_literals(self, literals: Mapping[str, bool]) -> None:
        for name in literals:
            if name not in self._index:
                raise UnknownVariableError(f"No node \"{name}\".")

    def query(
        self,
        posteriori: Mapping[str, bool],
        apriori: Mapping[str, bool] | None = None,
    ) -> float:
        """
        P(posteriori | apriori). Literal maps send a variable name to the value it
        must take (False = negated literal).

        Returns 0.0 whenever the joint mass is zero, which includes the
        undefined case of an impossible conditioning event.
        """
        apriori = apriori or {}
        self._check_literals(posteriori)
        self._check_literals(apriori)

        common = set(posteriori) & set(apriori)
        if common:
            raise OverlappingLiteralsError(
                f"Posteriori and apriori variable lists have common variables: {sorted(common)}"
            )

        apriori_mask = self._consistent(apriori)
        joint_mask = apriori_mask & self._consistent(posteriori)

        apriori_mass = float(self._weights[apriori_mask].sum())
        joint_mass = float(self._weights[joint_mask].sum())

        if joint_mass == 0.0:
            if apriori_mass == 0.0:
                logger.warning(
                    "Conditioning event %s has zero probability; returning 0.0.",
                    dict(apriori),
                )
            return 0.0
        return joint_mass / apriori_mass

    def marginal(self, name: str) -> float:
        return self.query({name: True}, {})

    def render(self) -> str:
        """
        Text table: header with the ordered variables, then one row per state
        with each bit right-aligned under its variable name.
        """
        lines = ["(" + ", ".join(self._nodes) + ")"]
        widths = [len(n) for n in self._nodes]
        for row, w in zip(self._table, self._weights):
            bits = ", ".join(f"{int(v):>{width}}" for v, width in zip(row, widths))
            lines.append(f"({bits}): {float(w)!r}")
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ClassificationResult(nodes={self._nodes}, num_states={self.num_states})"
