# connectivity.py
from __future__ import annotations

from collections import deque
from typing import Dict, List, Mapping, Sequence, Set

WHITE, GRAY, BLACK = 0, 1, 2


def reachable_undirected(
    start: str,
    children: Mapping[str, Sequence[str]],
    parents: Mapping[str, Sequence[str]],
) -> Set[str]:
    """
    BFS from `start` following arcs in both directions.
    Returns every node in the weakly-connected component of `start`.
    """
    visited = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for nxt in list(children.get(current, ())) + list(parents.get(current, ())):
            if nxt not in visited:
                visited.add(nxt)
                queue.append(nxt)

    return visited


def is_connected(
    nodes: Sequence[str],
    children: Mapping[str, Sequence[str]],
    parents: Mapping[str, Sequence[str]],
) -> bool:
    if not nodes:
        return True
    return len(reachable_undirected(nodes[0], children, parents)) == len(set(nodes))


def is_acyclic(nodes: Sequence[str], children: Mapping[str, Sequence[str]]) -> bool:
    """
    Three-colour DFS over directed arcs, started from every node not yet finished.
    Reaching a GRAY node means a cycle. Iterative, so long chains do not hit the
    recursion limit.
    """
    color: Dict[str, int] = {n: WHITE for n in nodes}

    for root in nodes:
        if color[root] != WHITE:
            continue

        color[root] = GRAY
        # stack of (node, remaining children)
        stack: List[tuple] = [(root, iter(children.get(root, ())))]

        while stack:
            node, it = stack[-1]
            advanced = False
            for child in it:
                c = color.get(child, WHITE)
                if c == GRAY:
                    return False
                if c == WHITE:
                    color[child] = GRAY
                    stack.append((child, iter(children.get(child, ()))))
                    advanced = True
                    break
            if not advanced:
                color[node] = BLACK
                stack.pop()

    return True
