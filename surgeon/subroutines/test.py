"""
test - evaluate a predicate against the current value

    test <css selector>     (node subject)
    test <regex>            (string subject)
"""

import re
from typing import Any, Tuple

from .chain import then
from ..exceptions import SurgeonError
from ..sentinels import INVALID_VALUE


def test_subroutine(evaluator, subject: Any, parameters: Tuple[Any, ...]) -> Any:
    """
    Return whether the subject satisfies the predicate

    Nodes are matched against a CSS selector, strings are searched with a
    regular expression. Any other subject yields the sentinel.
    """
    if not parameters:
        raise SurgeonError("test requires a predicate.")

    predicate = parameters[0]

    if evaluator.is_element(subject):
        return then(evaluator.matches_selector(subject, predicate), bool)
    if isinstance(subject, str):
        return re.search(predicate, subject) is not None
    return INVALID_VALUE


# keep pytest from collecting the subroutine when it is imported into tests
test_subroutine.__test__ = False
