from .interpreter import Interpreter, HELP_TOPICS
from .parser import CommandError, parse_literals, parse_query


__all__ = [
    "Interpreter",
    "HELP_TOPICS",
    "CommandError",
    "parse_literals",
    "parse_query",
]
