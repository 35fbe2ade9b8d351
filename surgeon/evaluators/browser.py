"""
Live-browser evaluator backed by Playwright

All primitives except ``is_element`` are coroutines, so queries using this
evaluator must run through ``surgeon_async`` / ``query_document_async``.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional

from playwright.async_api import ElementHandle, Page, async_playwright

from .base import Evaluator
from ..diagnostics import get_logger

logger = get_logger(__name__)


class BrowserEvaluator(Evaluator):
    """
    Evaluator over a Playwright page

    Args:
        page: Playwright page; the caller owns its lifecycle
    """

    def __init__(self, page: Page):
        self.page = page

    async def parse_document(self, raw: str) -> ElementHandle:
        """Load raw into the page and return its <html> element."""
        logger.debug(f"Loading document ({len(raw)} chars) into page")
        await self.page.set_content(raw)
        return await self.page.query_selector(":root")

    def is_element(self, value: Any) -> bool:
        return isinstance(value, ElementHandle)

    async def get_text(self, node: ElementHandle) -> str:
        return await node.text_content() or ""

    async def get_attribute_value(self, node: ElementHandle, name: str) -> Optional[str]:
        return await node.get_attribute(name)

    async def get_property_value(self, node: ElementHandle, name: str) -> Any:
        handle = await node.get_property(name)
        try:
            return await handle.json_value()
        finally:
            await handle.dispose()

    async def query_selector_all(self, node: ElementHandle, selector: str) -> List[ElementHandle]:
        return await node.query_selector_all(selector)

    async def matches_selector(self, node: ElementHandle, selector: str) -> bool:
        return bool(await node.evaluate("(element, selector) => element.matches(selector)", selector))

    def __repr__(self) -> str:
        return f"BrowserEvaluator(page={self.page!r})"


def browser_evaluator(page: Page) -> BrowserEvaluator:
    """Create a Playwright-backed evaluator for an existing page."""
    return BrowserEvaluator(page)


@asynccontextmanager
async def open_browser_evaluator(headless: bool = True, timeout_ms: int = 30000) -> AsyncIterator[BrowserEvaluator]:
    """
    Launch headless Chromium and yield an evaluator bound to a blank page

    Args:
        headless: Run the browser without a window
        timeout_ms: Default timeout for page operations
    """
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(
            headless=headless,
            args=["--no-sandbox", "--disable-dev-shm-usage"],
        )
        try:
            page = await browser.new_page()
            page.set_default_timeout(timeout_ms)
            yield BrowserEvaluator(page)
        finally:
            await browser.close()
