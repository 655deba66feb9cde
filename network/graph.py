# graph.py
from __future__ import annotations

import re
from typing import Dict, Iterator, List

from .errors import DuplicateNodeError, InvalidIdentifierError, UnknownNodeError

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def is_valid_identifier(name: str) -> bool:
    return isinstance(name, str) and _IDENTIFIER.fullmatch(name) is not None


def validate_identifier(name: str) -> None:
    if not is_valid_identifier(name):
        raise InvalidIdentifierError(f"\"{name}\" is a bad node identifier.")


class DirectedGraph:
    """
    Named nodes with ordered parent/child adjacency.

    - Adjacency sets are dicts used as insertion-ordered sets.
    - Every edge is stored on both endpoints; add_edge / remove_edge /
      remove_node keep the two sides in sync.
    - The graph owns no probabilities.
    """

    def __init__(self) -> None:
        self._children: Dict[str, Dict[str, None]] = {}
        self._parents: Dict[str, Dict[str, None]] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._children

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[str]:
        return iter(self._children)

    @property
    def nodes(self) -> List[str]:
        return list(self._children)

    def _require(self, name: str) -> None:
        if name not in self._children:
            raise UnknownNodeError(f"No node with name \"{name}\".")

    def add_node(self, name: str) -> None:
        validate_identifier(name)
        if name in self._children:
            raise DuplicateNodeError(f"Node \"{name}\" already exists.")
        self._children[name] = {}
        self._parents[name] = {}

    def remove_node(self, name: str) -> None:
        self._require(name)
        for parent in self._parents[name]:
            del self._children[parent][name]
        for child in self._children[name]:
            del self._parents[child][name]
        del self._children[name]
        del self._parents[name]

    def add_edge(self, tail: str, head: str) -> bool:
        """
        Insert the arc tail -> head. Returns False if nothing changed
        (self-loop or arc already present).
        """
        self._require(tail)
        self._require(head)
        if tail == head or head in self._children[tail]:
            return False
        self._children[tail][head] = None
        self._parents[head][tail] = None
        return True

    def remove_edge(self, tail: str, head: str) -> bool:
        self._require(tail)
        self._require(head)
        if head not in self._children[tail]:
            return False
        del self._children[tail][head]
        del self._parents[head][tail]
        return True

    def has_edge(self, tail: str, head: str) -> bool:
        """False when either endpoint is missing, e.g. after remove_node."""
        return tail in self._children and head in self._children[tail]

    def children(self, name: str) -> List[str]:
        self._require(name)
        return list(self._children[name])

    def parents(self, name: str) -> List[str]:
        self._require(name)
        return list(self._parents[name])

    def roots(self) -> List[str]:
        return sorted(n for n, ps in self._parents.items() if not ps)

    def children_map(self) -> Dict[str, List[str]]:
        return {n: list(cs) for n, cs in self._children.items()}

    def parents_map(self) -> Dict[str, List[str]]:
        return {n: list(ps) for n, ps in self._parents.items()}
