"""
read - extract a scalar from a single node

    read text
    read attribute <name>
    read property <name>
"""

from typing import Any, Tuple

from .chain import then
from ..exceptions import ReadSubroutineNotFoundError
from ..sentinels import INVALID_VALUE

READ_TARGETS = ("text", "attribute", "property")


def _present(value: Any) -> Any:
    return INVALID_VALUE if value is None else value


def read_subroutine(evaluator, subject: Any, parameters: Tuple[Any, ...]) -> Any:
    """
    Read text, an attribute or a property of the subject node

    Returns the sentinel when the subject is not a node or the attribute or
    property is absent.

    Raises:
        ReadSubroutineNotFoundError: Missing or unknown read target
    """
    if not parameters:
        raise ReadSubroutineNotFoundError(
            f"Read target is required (one of: {', '.join(READ_TARGETS)})."
        )

    target = parameters[0]
    if target not in READ_TARGETS:
        raise ReadSubroutineNotFoundError(f"Unknown read target '{target}'.")
    if target != "text" and len(parameters) < 2:
        raise ReadSubroutineNotFoundError(f"Read target '{target}' requires a name.")

    if not evaluator.is_element(subject):
        return INVALID_VALUE

    if target == "text":
        return then(evaluator.get_text(subject), _present)
    if target == "attribute":
        return then(evaluator.get_attribute_value(subject, parameters[1]), _present)
    return then(evaluator.get_property_value(subject, parameters[1]), _present)
