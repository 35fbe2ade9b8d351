"""
Logging helpers

Every surgeon module logs through ``get_logger(__name__)``. Loggers carry
their own stream handler and do not propagate, so importing surgeon never
reconfigures the host application's root logger.
"""

import logging
import os
from typing import Dict


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_LOGGER_CACHE: Dict[str, logging.Logger] = {}


def _default_level() -> int:
    # SURGEON_DEBUG=true turns on per-instruction tracing from the engine
    if os.getenv("SURGEON_DEBUG", "false").strip().lower() == "true":
        return logging.DEBUG
    return logging.INFO


def _attach_handler(logger: logging.Logger, level: int):
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Logger for a surgeon module, configured once per name."""
    if name in _LOGGER_CACHE:
        return _LOGGER_CACHE[name]

    logger = logging.getLogger(name)
    if not logger.handlers:
        _attach_handler(logger, _default_level())
    _LOGGER_CACHE[name] = logger
    return logger


def enable_diagnostics(level: str = "INFO"):
    """
    Set the level of every surgeon logger

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    numeric = getattr(logging, level.upper())
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    for logger in _LOGGER_CACHE.values():
        logger.setLevel(numeric)
        for handler in logger.handlers:
            handler.setLevel(numeric)
