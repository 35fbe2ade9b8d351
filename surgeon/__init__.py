"""
Surgeon - declarative data extraction from document trees

Usage:
    from surgeon import surgeon

    x = surgeon()
    x(["select article {0,}", {"title": "select h1 | read text", "links": "select a {0,}"}], html)
"""

import inspect
from typing import Any, Mapping, Optional

from .config import Config, Configuration, create_configuration
from .engine import query_document, query_document_async
from .evaluators import (
    BrowserEvaluator,
    Evaluator,
    StaticEvaluator,
    browser_evaluator,
    static_evaluator,
)
from .exceptions import (
    InvalidDataError,
    ReadSubroutineNotFoundError,
    SelectSubroutineUnexpectedResultCountError,
    SurgeonError,
)
from .query import create_query
from .registry import build_registry
from .sentinels import INVALID_VALUE, InvalidValueSentinel
from .subroutines import (
    BUILTIN_SUBROUTINES,
    read_subroutine,
    select_subroutine,
    test_subroutine,
)
from .model import Instruction, Query

__version__ = "0.1.0"


def surgeon(user_configuration: Optional[Mapping[str, Any]] = None):
    """
    Create a query function

    Args:
        user_configuration: Optional mapping with "subroutines" (override
            built-ins on name collision) and "evaluator"

    Returns:
        ``query(instructions, subject)``; a string subject is parsed by the
        evaluator, anything else is used as the root node
    """
    configuration = create_configuration(user_configuration)
    registry = build_registry(configuration.subroutines, BUILTIN_SUBROUTINES)
    evaluator = configuration.evaluator

    def query(instructions: Any, subject: Any) -> Any:
        query_instructions = create_query(instructions)
        root = evaluator.parse_document(subject) if isinstance(subject, str) else subject
        if inspect.isawaitable(root):
            if inspect.iscoroutine(root):
                root.close()
            raise SurgeonError(f"{evaluator!r} parses asynchronously; use surgeon_async.")
        return query_document(registry, evaluator, query_instructions, root)

    return query


def surgeon_async(user_configuration: Optional[Mapping[str, Any]] = None):
    """Create a coroutine query function for async evaluators (Playwright)."""
    configuration = create_configuration(user_configuration)
    registry = build_registry(configuration.subroutines, BUILTIN_SUBROUTINES)
    evaluator = configuration.evaluator

    async def query(instructions: Any, subject: Any) -> Any:
        query_instructions = create_query(instructions)
        root = evaluator.parse_document(subject) if isinstance(subject, str) else subject
        if inspect.isawaitable(root):
            root = await root
        return await query_document_async(registry, evaluator, query_instructions, root)

    return query


__all__ = [
    'surgeon',
    'surgeon_async',
    'Config',
    'Configuration',
    'create_configuration',
    'create_query',
    'build_registry',
    'query_document',
    'query_document_async',
    'Instruction',
    'Query',
    'Evaluator',
    'StaticEvaluator',
    'BrowserEvaluator',
    'static_evaluator',
    'browser_evaluator',
    'BUILTIN_SUBROUTINES',
    'read_subroutine',
    'select_subroutine',
    'test_subroutine',
    'INVALID_VALUE',
    'InvalidValueSentinel',
    'SurgeonError',
    'InvalidDataError',
    'ReadSubroutineNotFoundError',
    'SelectSubroutineUnexpectedResultCountError',
]
