"""
Document evaluators
"""

from .base import Evaluator
from .static import StaticEvaluator, static_evaluator
from .browser import BrowserEvaluator, browser_evaluator, open_browser_evaluator

__all__ = [
    'Evaluator',
    'StaticEvaluator',
    'static_evaluator',
    'BrowserEvaluator',
    'browser_evaluator',
    'open_browser_evaluator',
]
