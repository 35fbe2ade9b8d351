"""
Built-in subroutines
"""

from .read import read_subroutine
from .select import select_subroutine, parse_quantifier, Quantifier
from .test import test_subroutine

BUILTIN_SUBROUTINES = {
    'read': read_subroutine,
    'select': select_subroutine,
    'test': test_subroutine,
}

__all__ = [
    'BUILTIN_SUBROUTINES',
    'read_subroutine',
    'select_subroutine',
    'test_subroutine',
    'parse_quantifier',
    'Quantifier',
]
