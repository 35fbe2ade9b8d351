"""
Query interpreter

Walks a canonical Query against a root node. The current result is threaded
through the instructions; a list result fans the remaining instructions out
over its elements, and ``adopt`` branches into named child queries evaluated
against the current result. Both forms of branching are plain recursion with
no state shared between branches.
"""

import inspect
from typing import Any, Dict, List, Mapping, Sequence

from .exceptions import InvalidDataError, SurgeonError
from .sentinels import INVALID_VALUE
from .model import ADOPT, Instruction, Registry, Result, Subroutine
from .diagnostics import get_logger

logger = get_logger(__name__)


def _adopt_children(instructions: Sequence[Instruction], position: int) -> Mapping[str, Sequence[Instruction]]:
    instruction = instructions[position]

    if len(instruction.parameters) != 1:
        raise SurgeonError("Unexpected parameter length.")

    children = instruction.parameters[0]
    if not isinstance(children, Mapping):
        raise SurgeonError(
            f"Adopt parameter must be a mapping of child queries, got {type(children).__name__}."
        )

    # adopt is terminal; anything after it never runs
    skipped = len(instructions) - position - 1
    if skipped:
        logger.warning(f"Ignoring {skipped} instruction(s) after adopt at position {position}")

    return children


def _resolve_subroutine(registry: Registry, instruction: Instruction) -> Subroutine:
    subroutine = registry.get(instruction.subroutine)
    if subroutine is None:
        raise SurgeonError(f"Subroutine does not exist: '{instruction.subroutine}'.")
    return subroutine


def _trace(depth: int, message: str):
    logger.debug(f"{'  ' * depth}{message}")


def query_document(
    registry: Registry,
    evaluator: Any,
    instructions: Sequence[Instruction],
    root: Any,
    depth: int = 0,
) -> Result:
    """
    Evaluate instructions against root

    Args:
        registry: Subroutine name -> subroutine
        evaluator: Evaluator handed to every subroutine
        instructions: Canonical query
        root: Node (or value) the query starts from
        depth: Recursion depth, used for log indentation

    Returns:
        Scalar, node, list (fan-out) or dict (adopt)

    Raises:
        SurgeonError: Unknown subroutine, malformed adopt, or a subroutine
            returning an awaitable
        InvalidDataError: A subroutine returned the sentinel
    """
    result = root

    for position, instruction in enumerate(instructions):
        if instruction.subroutine == ADOPT:
            children = _adopt_children(instructions, position)
            _trace(depth, f"adopt -> {list(children.keys())}")
            return {
                name: query_document(registry, evaluator, child, result, depth + 1)
                for name, child in children.items()
            }

        subroutine = _resolve_subroutine(registry, instruction)
        last_result = result

        _trace(depth, f"{instruction.subroutine} {list(instruction.parameters)}")
        result = subroutine(evaluator, result, instruction.parameters)

        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise SurgeonError(
                f"Subroutine '{instruction.subroutine}' returned an awaitable; "
                f"use query_document_async / surgeon_async with this evaluator."
            )

        if result is INVALID_VALUE:
            _trace(depth, f"{instruction.subroutine} found no data")
            raise InvalidDataError(last_result, result)

        if isinstance(result, list):
            remaining = instructions[position + 1:]
            _trace(depth, f"fan-out over {len(result)} item(s), {len(remaining)} instruction(s) remaining")
            return [
                query_document(registry, evaluator, remaining, item, depth + 1)
                for item in result
            ]

    return result


async def query_document_async(
    registry: Registry,
    evaluator: Any,
    instructions: Sequence[Instruction],
    root: Any,
    depth: int = 0,
) -> Result:
    """
    Async version of query_document

    Awaits whatever a subroutine returns when it is awaitable. Fan-out
    elements and adopt branches run one after another, so list order and
    key order match the sync engine and the first failure aborts the query.
    """
    result = root

    for position, instruction in enumerate(instructions):
        if instruction.subroutine == ADOPT:
            children = _adopt_children(instructions, position)
            _trace(depth, f"adopt -> {list(children.keys())}")
            adopted: Dict[str, Result] = {}
            for name, child in children.items():
                adopted[name] = await query_document_async(registry, evaluator, child, result, depth + 1)
            return adopted

        subroutine = _resolve_subroutine(registry, instruction)
        last_result = result

        _trace(depth, f"{instruction.subroutine} {list(instruction.parameters)}")
        result = subroutine(evaluator, result, instruction.parameters)
        if inspect.isawaitable(result):
            result = await result

        if result is INVALID_VALUE:
            _trace(depth, f"{instruction.subroutine} found no data")
            raise InvalidDataError(last_result, result)

        if isinstance(result, list):
            remaining = instructions[position + 1:]
            _trace(depth, f"fan-out over {len(result)} item(s), {len(remaining)} instruction(s) remaining")
            fanned: List[Result] = []
            for item in result:
                fanned.append(await query_document_async(registry, evaluator, remaining, item, depth + 1))
            return fanned

    return result
