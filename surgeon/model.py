"""
Data model shared by the normalizer, the registry and the engine
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Tuple, Union


ADOPT = "adopt"


@dataclass(frozen=True)
class Instruction:
    """Single named step of a query pipeline."""

    subroutine: str
    parameters: Tuple[Any, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        parameters: List[Any] = []
        for parameter in self.parameters:
            if self.subroutine == ADOPT and hasattr(parameter, "items"):
                parameters.append({
                    name: [instruction.to_dict() for instruction in query]
                    for name, query in parameter.items()
                })
            else:
                parameters.append(parameter)
        return {"subroutine": self.subroutine, "parameters": parameters}


Query = Tuple[Instruction, ...]

# Node is whatever the evaluator hands out (bs4 Tag, Playwright ElementHandle)
Node = Any

Result = Union[Node, str, int, float, bool, None, List[Any], Dict[str, Any]]

Subroutine = Callable[[Any, Result, Tuple[Any, ...]], Union[Result, Awaitable[Result]]]

Registry = Dict[str, Subroutine]
