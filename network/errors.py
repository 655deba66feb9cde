# errors.py
from __future__ import annotations


class BNError(RuntimeError):
    pass


# Validation errors: bad input at the mutation boundary. Network state unchanged.

class ValidationError(BNError):
    pass


class InvalidIdentifierError(ValidationError):
    pass


class InvalidProbabilityError(ValidationError):
    pass


class SelfLoopError(ValidationError):
    pass


class DuplicateNodeError(ValidationError):
    pass


class UnknownNodeError(ValidationError):
    pass


# Structural errors: the network cannot be classified as a whole.

class StructuralError(BNError):
    pass


class EmptyNetworkError(StructuralError):
    pass


class DisconnectedNetworkError(StructuralError):
    pass


class CyclicNetworkError(StructuralError):
    pass


# Consistency errors.

class ConsistencyError(BNError):
    pass


class MissingProbabilityError(ConsistencyError):
    pass


class ProbabilityMassError(ConsistencyError):
    """Joint-state weights do not sum to 1.0. Indicates an internal defect."""


# Query errors.

class QueryError(BNError):
    pass


class OverlappingLiteralsError(QueryError):
    pass


class UnknownVariableError(QueryError):
    pass
