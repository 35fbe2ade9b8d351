"""
Static-tree evaluator backed by BeautifulSoup
"""

from typing import Any, Callable, Dict, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from .base import Evaluator
from ..diagnostics import get_logger

logger = get_logger(__name__)


def _class_name(node: Tag) -> str:
    classes = node.get("class") or []
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def _tag_name(node: Tag) -> str:
    if isinstance(node, BeautifulSoup):
        return "#document"
    return node.name.upper()


# DOM property name -> reader over a bs4 Tag
PROPERTY_READERS: Dict[str, Callable[[Tag], Any]] = {
    "textContent": lambda node: node.get_text(),
    "innerText": lambda node: node.get_text(),
    "innerHTML": lambda node: node.decode_contents(),
    "outerHTML": lambda node: str(node),
    "tagName": _tag_name,
    "nodeName": _tag_name,
    "localName": lambda node: None if isinstance(node, BeautifulSoup) else node.name,
    "id": lambda node: node.get("id", ""),
    "className": _class_name,
    "value": lambda node: node.get("value"),
    "href": lambda node: node.get("href"),
    "src": lambda node: node.get("src"),
    "childElementCount": lambda node: len(node.find_all(True, recursive=False)),
}


class StaticEvaluator(Evaluator):
    """
    Evaluator over a BeautifulSoup tree

    Args:
        parser: Parser name handed to BeautifulSoup ("html.parser", "lxml", ...)
    """

    def __init__(self, parser: str = "html.parser"):
        self.parser = parser

    def parse_document(self, raw: str) -> BeautifulSoup:
        """Document root (the BeautifulSoup object, not its <html> element)."""
        logger.debug(f"Parsing document ({len(raw)} chars) with {self.parser}")
        return BeautifulSoup(raw, self.parser)

    def is_element(self, value: Any) -> bool:
        return isinstance(value, Tag)

    def get_text(self, node: Tag) -> str:
        return node.get_text()

    def get_attribute_value(self, node: Tag, name: str) -> Optional[str]:
        value = node.get(name)
        # bs4 splits multi-valued attributes such as class into lists
        if isinstance(value, list):
            return " ".join(value)
        return value

    def get_property_value(self, node: Tag, name: str) -> Any:
        reader = PROPERTY_READERS.get(name)
        if reader is None:
            logger.debug(f"Property '{name}' is not available on static nodes")
            return None
        return reader(node)

    def query_selector_all(self, node: Tag, selector: str) -> List[Tag]:
        return list(node.select(selector))

    def matches_selector(self, node: Tag, selector: str) -> bool:
        return bool(node.css.match(selector))

    def __repr__(self) -> str:
        return f"StaticEvaluator(parser={self.parser!r})"


def static_evaluator(parser: str = "html.parser") -> StaticEvaluator:
    """Create a BeautifulSoup-backed evaluator."""
    return StaticEvaluator(parser)
