"""
Marker returned by subroutines that legitimately found no data
"""

from typing import Optional


class InvalidValueSentinel:
    """
    Singleton "no data" marker.

    Every call to ``InvalidValueSentinel()`` returns the same instance, so
    the engine can compare by identity. Copies and unpickled values resolve
    to that instance too.
    """

    _instance: Optional["InvalidValueSentinel"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "INVALID_VALUE"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (InvalidValueSentinel, ())


INVALID_VALUE = InvalidValueSentinel()
