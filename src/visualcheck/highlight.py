"""
Mark elements the model relied on, for the highlighted evidence screenshot.
"""

from typing import Iterable, List

import allure
from loguru import logger

from .errors import HighlightResolutionError

HIGHLIGHT_CLASS = "ai-highlight"

HIGHLIGHT_CSS = """
.ai-highlight {
  outline: 3px solid #ff6b6b !important;
  outline-offset: 2px !important;
  background-color: rgba(255, 107, 107, 0.1) !important;
  position: relative !important;
}
.ai-highlight::before {
  content: "AI Found";
  position: absolute;
  top: -25px;
  left: 0;
  background: #ff6b6b;
  color: white;
  padding: 2px 6px;
  font-size: 12px;
  font-weight: bold;
  z-index: 1000;
  border-radius: 3px;
}
"""

MARK_SCRIPT = f"el => el.classList.add('{HIGHLIGHT_CLASS}')"


class ElementHighlighter:
    """
    Outline elements on a Playwright page by locator.

    Markers are never removed; they stay on the page for the rest of the test.

    Usage:
        highlighter = ElementHighlighter(page)
        marked = highlighter.highlight(["#header-nav", "text=Sign in"])
    """

    def __init__(self, page):
        self.page = page

    def highlight(self, locators: Iterable[str]) -> List[str]:
        """
        Highlight the first element matched by each locator.

        A locator that matches nothing or fails to parse is logged and skipped;
        it never stops the others from being highlighted.

        Args:
            locators: Playwright selector strings

        Returns:
            The locators that were actually marked, in input order
        """
        locators = list(locators or [])
        if not locators:
            return []

        with allure.step("Highlight elements"):
            self.page.add_style_tag(content=HIGHLIGHT_CSS)

            marked = []
            for locator in locators:
                try:
                    self._mark(locator)
                    marked.append(locator)
                except Exception as e:
                    logger.warning(f"Could not highlight element with locator: {locator} ({e})")

            logger.debug(f"Highlighted {len(marked)}/{len(locators)} elements")
            return marked

    def _mark(self, locator: str):
        element = self.page.locator(locator).first
        if element.count() == 0:
            raise HighlightResolutionError(locator)
        element.evaluate(MARK_SCRIPT)
