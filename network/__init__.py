from .errors import (
    BNError,
    ValidationError,
    InvalidIdentifierError,
    InvalidProbabilityError,
    SelfLoopError,
    DuplicateNodeError,
    UnknownNodeError,
    StructuralError,
    EmptyNetworkError,
    DisconnectedNetworkError,
    CyclicNetworkError,
    ConsistencyError,
    MissingProbabilityError,
    ProbabilityMassError,
    QueryError,
    OverlappingLiteralsError,
    UnknownVariableError,
)
from .graph import DirectedGraph, is_valid_identifier, validate_identifier
from .probability import ProbabilityMap, check_probability
from .connectivity import reachable_undirected, is_acyclic, is_connected
from .compiled import CompiledBayesNet, compile_network
from .result import ClassificationResult, SystemState
from .classifier import classify, schedule_levels, PROBABILITY_TOLERANCE
from .bayes_net import BayesNet, NodeInfo, ResultState
from .graphs import get_tree, get_chain, get_general, random_layered_network, network_to_script


__all__ = [
    "BayesNet",
    "NodeInfo",
    "ResultState",
    "DirectedGraph",
    "ProbabilityMap",
    "CompiledBayesNet",
    "ClassificationResult",
    "SystemState",
    "classify",
    "schedule_levels",
    "compile_network",
    "check_probability",
    "is_valid_identifier",
    "validate_identifier",
    "reachable_undirected",
    "is_acyclic",
    "is_connected",
    "PROBABILITY_TOLERANCE",
    "BNError",
    "ValidationError",
    "InvalidIdentifierError",
    "InvalidProbabilityError",
    "SelfLoopError",
    "DuplicateNodeError",
    "UnknownNodeError",
    "StructuralError",
    "EmptyNetworkError",
    "DisconnectedNetworkError",
    "CyclicNetworkError",
    "ConsistencyError",
    "MissingProbabilityError",
    "ProbabilityMassError",
    "QueryError",
    "OverlappingLiteralsError",
    "UnknownVariableError",
    "get_tree",
    "get_chain",
    "get_general",
    "random_layered_network",
    "network_to_script",
]
