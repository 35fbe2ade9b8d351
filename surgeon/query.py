"""
Query normalization

Turns the terse authoring format into the canonical Query the engine runs:

    "select article {0,} | read property innerHTML"
    ["select article", {"title": "select h1 | read text", "links": ["select a {0,}"]}]

- a string holds one or more instructions separated by an unquoted ``|``;
  each instruction is split shell-style, so selectors containing spaces
  must be quoted: ``select "ul > li" {0,}``
- a mapping becomes an ``adopt`` instruction; each value is itself a query
- a list or tuple concatenates the instructions of its items
- an Instruction passes through unchanged, except that a hand-built
  ``adopt`` with a single mapping has its branches normalized like a mapping
"""

import shlex
from types import MappingProxyType
from typing import Any, Iterator, List, Mapping

from .exceptions import SurgeonError
from .model import ADOPT, Instruction, Query


def _split_pipeline(expression: str) -> List[str]:
    segments: List[str] = []
    current: List[str] = []
    quote = None

    for char in expression:
        if quote:
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char == "|":
            segments.append("".join(current))
            current = []
            continue
        current.append(char)

    segments.append("".join(current))
    return segments


def _parse_expression(expression: str) -> Iterator[Instruction]:
    for segment in _split_pipeline(expression):
        try:
            tokens = shlex.split(segment)
        except ValueError as e:
            raise SurgeonError(f"Invalid instruction '{segment.strip()}': {e}") from e

        if not tokens:
            raise SurgeonError(f"Empty instruction in '{expression}'.")

        yield Instruction(subroutine=tokens[0], parameters=tuple(tokens[1:]))


def _create_adopt(children: Mapping[Any, Any]) -> Instruction:
    branches = {}
    for name, child in children.items():
        if not isinstance(name, str):
            raise SurgeonError(f"Adopt branch name must be a string, got {type(name).__name__}.")
        branches[name] = create_query(child)
    return Instruction(subroutine=ADOPT, parameters=(MappingProxyType(branches),))


def _normalize(denormalized: Any) -> Iterator[Instruction]:
    if isinstance(denormalized, Instruction):
        parameters = denormalized.parameters
        if denormalized.subroutine == ADOPT and len(parameters) == 1 and isinstance(parameters[0], Mapping):
            yield _create_adopt(parameters[0])
        else:
            # a malformed adopt is rejected by the engine
            yield denormalized
    elif isinstance(denormalized, str):
        yield from _parse_expression(denormalized)
    elif isinstance(denormalized, Mapping):
        yield _create_adopt(denormalized)
    elif isinstance(denormalized, (list, tuple)):
        for item in denormalized:
            yield from _normalize(item)
    else:
        raise SurgeonError(f"Unexpected instruction type: {type(denormalized).__name__}.")


def create_query(denormalized: Any) -> Query:
    """
    Normalize a denormalized query into a tuple of Instructions

    Args:
        denormalized: String, mapping, list/tuple or Instruction

    Returns:
        Canonical Query

    Raises:
        SurgeonError: Unsupported item type, empty or unparsable instruction
    """
    return tuple(_normalize(denormalized))


def describe_query(query: Query) -> List[dict]:
    """JSON-friendly view of a canonical query."""
    return [instruction.to_dict() for instruction in query]
