"""
Subroutine registry assembly
"""

from typing import Mapping, Optional

from .exceptions import SurgeonError
from .model import ADOPT, Registry, Subroutine
from .diagnostics import get_logger

logger = get_logger(__name__)


def build_registry(
    user_subroutines: Optional[Mapping[str, Subroutine]],
    builtins: Mapping[str, Subroutine],
) -> Registry:
    """
    Merge user subroutines over the built-ins

    User entries win on name collision. Signatures are not checked; a
    malformed subroutine fails when it is invoked.

    Args:
        user_subroutines: User extensions (may be None)
        builtins: Built-in subroutines

    Returns:
        New name -> subroutine mapping

    Raises:
        SurgeonError: Non-string name, reserved name or non-callable value
    """
    registry: Registry = dict(builtins)

    for name, subroutine in (user_subroutines or {}).items():
        if not isinstance(name, str):
            raise SurgeonError(f"Subroutine name must be a string, got {type(name).__name__}.")
        if name == ADOPT:
            raise SurgeonError(f"'{ADOPT}' is reserved and cannot be registered.")
        if not callable(subroutine):
            raise SurgeonError(f"Subroutine '{name}' is not callable.")

        if name in registry:
            logger.warning(
                f"Overriding built-in subroutine '{name}': "
                f"{getattr(registry[name], '__name__', registry[name])} -> "
                f"{getattr(subroutine, '__name__', subroutine)}"
            )
        registry[name] = subroutine
        logger.debug(f"Registered subroutine '{name}'")

    return registry
