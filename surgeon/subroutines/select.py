"""
select - navigate from a node to descendant nodes

    select <css selector>
    select <css selector> <quantifier>

Quantifiers follow regular expression syntax: {n}, {m,} or {m,n}.
"""

import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .chain import then
from ..exceptions import SelectSubroutineUnexpectedResultCountError, SurgeonError
from ..sentinels import INVALID_VALUE

QUANTIFIER_PATTERN = re.compile(r'^\{(\d+)(,(\d*))?\}$')


@dataclass(frozen=True)
class Quantifier:
    """Accepted match count range; maximum None means unbounded."""

    minimum: int
    maximum: Optional[int]
    expression: str

    @property
    def single(self) -> bool:
        return self.maximum == 1


def parse_quantifier(expression: str) -> Quantifier:
    """
    Parse a {n} / {m,} / {m,n} expression

    Raises:
        SurgeonError: Malformed expression or minimum above maximum
    """
    match = QUANTIFIER_PATTERN.match(str(expression).strip())
    if not match:
        raise SurgeonError(f"Invalid quantifier expression '{expression}'.")

    minimum = int(match.group(1))
    if match.group(2) is None:
        maximum: Optional[int] = minimum
    elif match.group(3):
        maximum = int(match.group(3))
    else:
        maximum = None

    if maximum is not None and minimum > maximum:
        raise SurgeonError(f"Invalid quantifier expression '{expression}': minimum exceeds maximum.")

    return Quantifier(minimum=minimum, maximum=maximum, expression=expression)


def _apply_quantifier(matches: List[Any], selector: str, quantifier: Optional[Quantifier]) -> Any:
    count = len(matches)

    if quantifier is None:
        if count == 0:
            return INVALID_VALUE
        if count == 1:
            return matches[0]
        return list(matches)

    if count < quantifier.minimum:
        return INVALID_VALUE
    if quantifier.maximum is not None and count > quantifier.maximum:
        raise SelectSubroutineUnexpectedResultCountError(selector, count, quantifier.expression)

    if quantifier.single:
        return matches[0] if matches else None
    return list(matches)


def select_subroutine(evaluator, subject: Any, parameters: Tuple[Any, ...]) -> Any:
    """
    Select descendants of the subject node

    Without a quantifier: no match yields the sentinel, one match the node,
    several a list. With a quantifier whose maximum is 1 the result is a
    single node (or None when zero matches are allowed); any other
    quantifier always yields a list, empty when the minimum is 0.

    Raises:
        SurgeonError: Missing selector or malformed quantifier
        SelectSubroutineUnexpectedResultCountError: More matches than the
            quantifier maximum
    """
    if not parameters:
        raise SurgeonError("select requires a CSS selector.")

    selector = parameters[0]
    quantifier = parse_quantifier(parameters[1]) if len(parameters) > 1 else None

    if not evaluator.is_element(subject):
        return INVALID_VALUE

    return then(
        evaluator.query_selector_all(subject, selector),
        lambda matches: _apply_quantifier(matches, selector, quantifier),
    )
