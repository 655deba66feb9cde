# parser.py
from __future__ import annotations

from typing import Dict, List, Tuple

from network.errors import BNError
from network.graph import validate_identifier


class CommandError(BNError):
    """Malformed shell command."""


def split_words(line: str) -> List[str]:
    return line.split()


def strip_trailing_comment(words: List[str], start: int) -> List[str]:
    """
    Words from index `start` onwards must be empty or begin with '#'.
    Returns the words before `start`.
    """
    if len(words) > start and not words[start].startswith("#"):
        raise CommandError("Bad comment format.")
    return words[:start]


def parse_literals(text: str) -> Dict[str, bool]:
    """
    "a, not b" -> {"a": True, "b": False}. Empty text gives an empty map.
    """
    literals: Dict[str, bool] = {}
    text = text.strip()
    if not text:
        return literals

    for part in text.split(","):
        words = part.split()
        if not words:
            raise CommandError("Empty variable in literal list.")

        value = True
        if words[0] == "not":
            value = False
            words = words[1:]
        if len(words) != 1:
            raise CommandError(f"Cannot parse literal \"{part.strip()}\".")

        name = words[0]
        validate_identifier(name)
        if name in literals and literals[name] != value:
            raise CommandError(f"Variable \"{name}\" is both required and negated.")
        literals[name] = value

    return literals


def is_query(line: str) -> bool:
    return line.startswith("p(")


def parse_query(line: str) -> Tuple[Dict[str, bool], Dict[str, bool]]:
    """
    Parse "p(<posteriori> | <apriori>)". The bar and the apriori part may be
    omitted for a plain marginal, e.g. "p(a, not b)".

    Returns (posteriori, apriori).
    """
    line = line.strip()
    if not is_query(line):
        raise CommandError("A query must start with \"p(\".")
    if not line.endswith(")"):
        raise CommandError("No trailing \")\".")

    inner = line[2:-1]
    parts = inner.split("|")
    if len(parts) > 2:
        raise CommandError("More than one delimiter bar |.")

    posteriori = parse_literals(parts[0])
    if not posteriori:
        raise CommandError("No posteriori variables in query.")
    apriori = parse_literals(parts[1]) if len(parts) == 2 else {}
    return posteriori, apriori
