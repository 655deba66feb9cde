import logging

import pytest

from network import BayesNet, DirectedGraph, ProbabilityMap, classify, compile_network
from utils import LOGGER_NAMES


@pytest.fixture(autouse=True)
def reset_loggers():
    """setup_logger() detaches the package loggers from root; undo it after each test."""
    yield
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True


def make_net(probabilities, edges=()):
    """Build a BayesNet from {name: p} and [(tail, head), ...]."""
    bn = BayesNet()
    for name, p in probabilities.items():
        bn.create_node(name, p)
    for tail, head in edges:
        bn.connect(tail, head)
    return bn


def classify_forest(probabilities, edges=()):
    """Classify without the connectivity gate, for multi-component networks."""
    graph = DirectedGraph()
    probs = ProbabilityMap()
    for name, p in probabilities.items():
        graph.add_node(name)
        probs[name] = p
    for tail, head in edges:
        graph.add_edge(tail, head)
    return classify(compile_network(graph, probs, require_connected=False))


@pytest.fixture
def rain_wet():
    """Rain (0.25) -> Wet (0.5)."""
    return make_net({"Rain": 0.25, "Wet": 0.5}, [("Rain", "Wet")])


@pytest.fixture
def collider():
    """A (0.3) -> C (0.5) <- B (0.7). A and B are independent."""
    return make_net({"A": 0.3, "B": 0.7, "C": 0.5}, [("A", "C"), ("B", "C")])
