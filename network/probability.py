# probability.py
from __future__ import annotations

import math
from typing import Dict, Iterator

from .errors import InvalidProbabilityError, MissingProbabilityError


def check_probability(p: float) -> float:
    """
    Validate a probability value and return it as a float.
    Raises InvalidProbabilityError for NaN or values outside [0, 1].
    """
    try:
        p = float(p)
    except (TypeError, ValueError):
        raise InvalidProbabilityError(f"Cannot parse \"{p}\" as a probability value.")

    if math.isnan(p):
        raise InvalidProbabilityError("Input probability is NaN.")
    if p < 0.0:
        raise InvalidProbabilityError(f"Probability {p} is too small. Should be at least 0.")
    if p > 1.0:
        raise InvalidProbabilityError(f"Probability {p} is too large. Should be at most 1.")
    return p


class ProbabilityMap:
    """Maps node names to validated probabilities. Independent of graph structure."""

    def __init__(self) -> None:
        self._map: Dict[str, float] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[str]:
        return iter(self._map)

    def __getitem__(self, name: str) -> float:
        try:
            return self._map[name]
        except KeyError:
            raise MissingProbabilityError(
                f"The node \"{name}\" is not mapped in the probability map."
            ) from None

    def __setitem__(self, name: str, p: float) -> None:
        self._map[name] = check_probability(p)

    def get(self, name: str, default=None):
        return self._map.get(name, default)

    def remove(self, name: str) -> None:
        self._map.pop(name, None)
