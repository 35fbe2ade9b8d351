import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from .evaluators.static import StaticEvaluator
from .exceptions import SurgeonError
from .model import Registry

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ["true", "1", "yes"]


@dataclass
class Config:
    """Environment settings"""
    html_parser: str = field(default_factory=lambda: os.getenv("SURGEON_HTML_PARSER", "html.parser"))
    debug: bool = field(default_factory=lambda: _env_flag("SURGEON_DEBUG", "false"))
    headless: bool = field(default_factory=lambda: _env_flag("SURGEON_HEADLESS", "true"))
    browser_timeout_ms: int = field(default_factory=lambda: int(os.getenv("SURGEON_BROWSER_TIMEOUT_MS", "30000")))


@dataclass(frozen=True)
class Configuration:
    """Resolved options of a query function"""
    subroutines: Registry
    evaluator: Any


CONFIGURATION_KEYS = ("subroutines", "evaluator")


def create_configuration(
    user_configuration: Optional[Mapping[str, Any]] = None,
    settings: Optional[Config] = None,
) -> Configuration:
    """
    Validate user options and fill in defaults

    Args:
        user_configuration: Mapping with optional "subroutines" and "evaluator"
        settings: Environment settings (read from the environment if omitted)

    Returns:
        Configuration with user subroutines (not yet merged with built-ins)
        and an evaluator (StaticEvaluator by default)

    Raises:
        SurgeonError: Unknown option or malformed value
    """
    user_configuration = user_configuration or {}
    if not isinstance(user_configuration, Mapping):
        raise SurgeonError("Configuration must be a mapping.")

    unknown = [key for key in user_configuration if key not in CONFIGURATION_KEYS]
    if unknown:
        raise SurgeonError(
            f"Unknown configuration option(s): {', '.join(map(str, unknown))}. "
            f"Recognized options: {', '.join(CONFIGURATION_KEYS)}."
        )

    subroutines = user_configuration.get("subroutines") or {}
    if not isinstance(subroutines, Mapping):
        raise SurgeonError("Configuration option 'subroutines' must be a mapping.")

    evaluator = user_configuration.get("evaluator")
    if evaluator is None:
        evaluator = StaticEvaluator((settings or Config()).html_parser)

    return Configuration(subroutines=dict(subroutines), evaluator=evaluator)
