"""
Evaluator base class

An evaluator owns the concrete document tree. The engine never looks inside
a node; built-in subroutines reach the tree only through these primitives.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class Evaluator(ABC):
    """
    Capability provider for built-in subroutines

    Primitives may be plain methods or coroutines. Built-ins handle both;
    only ``is_element`` must always be synchronous.
    """

    @abstractmethod
    def parse_document(self, raw: str) -> Any:
        """
        Parse a raw document into its root node

        Args:
            raw: Document source (HTML)

        Returns:
            Root node. Evaluators differ here: the static evaluator returns
            the document itself, so ``select html`` finds the ``<html>``
            element and ``test html`` is false on the root, while the
            browser evaluator returns the ``<html>`` element, on which
            ``test html`` is true and ``select html`` matches nothing
        """
        pass

    @abstractmethod
    def is_element(self, value: Any) -> bool:
        """Whether value is a node this evaluator can query."""
        pass

    @abstractmethod
    def get_text(self, node: Any) -> str:
        pass

    @abstractmethod
    def get_attribute_value(self, node: Any, name: str) -> Optional[str]:
        """Attribute value, or None when the attribute is absent."""
        pass

    @abstractmethod
    def get_property_value(self, node: Any, name: str) -> Any:
        """DOM property value, or None when the property is unavailable."""
        pass

    @abstractmethod
    def query_selector_all(self, node: Any, selector: str) -> List[Any]:
        """Descendants of node matching a CSS selector, in document order."""
        pass

    @abstractmethod
    def matches_selector(self, node: Any, selector: str) -> bool:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
