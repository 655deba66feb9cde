# classifier.py
from __future__ import annotations

import itertools
import logging
import time
from typing import List, Tuple

from .compiled import CompiledBayesNet
from .errors import ProbabilityMassError
from .result import ClassificationResult

logger = logging.getLogger(__name__)

PROBABILITY_TOLERANCE = 1e-4


def schedule_levels(net: CompiledBayesNet) -> List[Tuple[int, ...]]:
    """
    Split the nodes into enumeration levels.

    Level 0 holds the roots. Each following level is the set of children of the
    previous level, minus the nodes that still have an unvisited parent; those
    come back once their last parent has been visited. Within a level nodes are
    ordered by name.

    The schedule only depends on structure, never on node values, so it is
    computed once per classification.
    """
    visited = [False] * net.num_nodes
    levels: List[Tuple[int, ...]] = []
    candidates = sorted(net.roots())

    while candidates:
        ready = tuple(
            i for i in candidates
            if all(visited[int(p)] for p in net.parents[i])
        )
        for i in ready:
            visited[i] = True
        levels.append(ready)
        candidates = sorted({int(c) for i in ready for c in net.children[i]})

    return levels


def _split_level(
    net: CompiledBayesNet,
    level: Tuple[int, ...],
    parent_masks: List[int],
    on_mask: int,
) -> Tuple[int, List[int]]:
    """
    Returns (forced_on_mask, varying).

    Forced OFF: some parent is OFF, or p == 0.
    Forced ON:  no parent is OFF and p == 1.
    Everything else varies.
    """
    forced_on = 0
    varying: List[int] = []
    for i in level:
        p = net.p1[i]
        has_off_parent = (on_mask & parent_masks[i]) != parent_masks[i]
        if has_off_parent or p == 0.0:
            continue
        if p == 1.0:
            forced_on |= 1 << i
        else:
            varying.append(i)
    return forced_on, varying


def _enumerate_states(
    net: CompiledBayesNet,
    levels: List[Tuple[int, ...]],
) -> Tuple[List[int], List[float]]:
    """
    Depth-first over levels. Each frame is (depth, on_mask, probability) and is
    never mutated, so sibling branches share no state. Combinations of the
    varying nodes are visited in binary counting order (last node flips
    fastest); frames are pushed in reverse to keep that order on the stack.
    """
    parent_masks = [net.parent_mask(i) for i in range(net.num_nodes)]
    p1 = [float(p) for p in net.p1]

    masks: List[int] = []
    weights: List[float] = []
    stack: List[Tuple[int, int, float]] = [(0, 0, 1.0)]

    while stack:
        depth, on_mask, probability = stack.pop()

        if depth == len(levels):
            masks.append(on_mask)
            weights.append(probability)
            continue

        forced_on, varying = _split_level(net, levels[depth], parent_masks, on_mask)
        base = on_mask | forced_on

        frames = []
        for combo in itertools.product((False, True), repeat=len(varying)):
            mask = base
            level_p = 1.0
            for i, on in zip(varying, combo):
                if on:
                    mask |= 1 << i
                    level_p *= p1[i]
                else:
                    level_p *= 1.0 - p1[i]
            frames.append((depth + 1, mask, probability * level_p))

        stack.extend(reversed(frames))

    return masks, weights


def classify(net: CompiledBayesNet) -> ClassificationResult:
    """
    Enumerate every joint state of a compiled network.

    Raises ProbabilityMassError if the state weights do not sum to 1.0 within
    PROBABILITY_TOLERANCE.
    """
    start = time.perf_counter()
    logger.debug("Classifying network with %d nodes.", net.num_nodes)

    levels = schedule_levels(net)
    logger.debug("Enumeration schedule has %d levels.", len(levels))

    masks, weights = _enumerate_states(net, levels)

    order = [i for level in levels for i in level]
    result = ClassificationResult.from_masks(
        nodes=[net.names[i] for i in order],
        node_bits=order,
        masks=masks,
        weights=weights,
    )

    total = result.total_probability()
    # NaN fails every comparison, so test for being inside the tolerance
    if not abs(1.0 - total) <= PROBABILITY_TOLERANCE:
        raise ProbabilityMassError(
            f"The sum of probabilities over all possible states is {total}, not 1.0."
        )

    elapsed = time.perf_counter() - start
    result.elapsed = elapsed

    logger.info(
        "Compiled the graph in %.0f milliseconds. Number of possible states: %d",
        elapsed * 1000.0,
        result.num_states,
    )
    return result
