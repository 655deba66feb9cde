from __future__ import annotations

from typing import List

import numpy as np

from .bayes_net import BayesNet


def random_probability(
    mode: str = "easy",
    rng: np.random.Generator | None = None,
) -> float:
    """
    Returns one node probability drawn for the given mode.
    """
    if rng is None:
        rng = np.random.default_rng()

    if mode == "easy":
        # high entropy, concentrated near 0.5
        p = rng.beta(5.0, 5.0)

    elif mode == "medium":
        # uniform on [0,1]
        p = rng.beta(1.0, 1.0)

    elif mode == "hard":
        # near-deterministic, peaks near 0 and 1
        p = rng.beta(0.3, 0.3)

    elif mode == "logit":
        # logistic-normal
        z = rng.normal(0.0, 1.5)
        p = 1.0 / (1.0 + np.exp(-z))

    else:
        raise ValueError(f"Unknown mode '{mode}'")

    return float(p)


def _build(names: List[str], edges: List[tuple], mode: str, seed: int) -> BayesNet:
    rng = np.random.default_rng(seed)
    bn = BayesNet()
    for n in names:
        bn.create_node(n, random_probability(mode, rng))
    for tail, head in edges:
        bn.connect(tail, head)
    return bn


def get_general(mode="easy", seed=2000):

    return _build(
        ["A", "B", "C", "D", "E"],
        [("A", "C"), ("B", "C"), ("C", "D"), ("A", "D"), ("D", "E")],
        mode,
        seed,
    )


def get_chain(mode="easy", seed=2000, length=7):

    names = [chr(ord("A") + i) for i in range(length)]
    return _build(names, list(zip(names, names[1:])), mode, seed)


def get_tree(mode="easy", seed=2000):

    return _build(
        ["A", "B", "C", "D", "E", "F", "G"],
        [("A", "B"), ("A", "C"), ("B", "D"), ("B", "E"), ("C", "F"), ("C", "G")],
        mode,
        seed,
    )


def random_layered_network(
    depth: int = 9,
    width: int = 8,
    edges: int = 200,
    probability: float | None = 0.5,
    seed: int | None = None,
) -> BayesNet:
    """
    Random layered DAG. Arcs only run from a lower layer to a higher one, so the
    result is acyclic by construction (it may still be disconnected).

    Each layer gets max(4, U{1..width}) nodes named nde0, nde1, ...
    probability=None draws each node's probability uniformly from [0,1].
    """
    if depth < 2:
        raise ValueError("depth must be at least 2.")
    rng = np.random.default_rng(seed)

    layers: List[List[str]] = []
    node_id = 0
    for _ in range(depth):
        w = max(4, int(rng.integers(1, width + 1)))
        layers.append([f"nde{node_id + i}" for i in range(w)])
        node_id += w

    bn = BayesNet()
    for layer in layers:
        for name in layer:
            p = float(rng.random()) if probability is None else probability
            bn.create_node(name, p)

    remaining = int(edges)
    while remaining > 0:
        a, b = (int(x) for x in rng.integers(0, depth, size=2))
        if a == b:
            continue
        if a > b:
            a, b = b, a
        tail = layers[a][int(rng.integers(0, len(layers[a])))]
        head = layers[b][int(rng.integers(0, len(layers[b])))]
        bn.connect(tail, head)
        remaining -= 1

    return bn


def network_to_script(bn: BayesNet) -> str:
    """
    Render a network as shell commands: all `new` lines first, then `connect`.
    """
    lines = [f"new {n} {bn.probability(n)!r}" for n in bn.nodes]
    for n in bn.nodes:
        for child in bn.children(n):
            lines.append(f"connect {n} to {child}")
    return "\n".join(lines) + "\n"
