"""
Surgeon exceptions
"""

from typing import Any, Optional


class SurgeonError(Exception):
    """Structural misuse of the instruction language"""
    pass


class InvalidDataError(SurgeonError):
    """
    A subroutine ran but found no data

    Attributes:
        input_value: Value passed to the subroutine that yielded nothing
        sentinel: The sentinel returned by the subroutine
    """

    def __init__(self, input_value: Any, sentinel: Any, message: str = "Invalid data."):
        super().__init__(message)
        self.input_value = input_value
        self.sentinel = sentinel


class ReadSubroutineNotFoundError(SurgeonError):
    """Missing or unknown read target"""
    pass


class SelectSubroutineUnexpectedResultCountError(SurgeonError):
    """Selector matched more nodes than its quantifier allows"""

    def __init__(self, selector: str, count: int, quantifier: Optional[str] = None):
        super().__init__(
            f"Selector '{selector}' matched {count} node(s); "
            f"quantifier {quantifier or '(none)'} does not allow it."
        )
        self.selector = selector
        self.count = count
        self.quantifier = quantifier
