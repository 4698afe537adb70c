"""
AI Visual Tester for E2E Testing

The model receives BOTH:
1. Screenshot (visual) - what the user sees
2. Reduced DOM (structure) - what is actually on the page

It judges a natural-language claim against them and names the elements it
relied on, which are then highlighted and attached to the test report.

Supports pluggable model backends (Azure OpenAI, OpenAI, or your own).
"""

import base64
import time
from typing import Iterable, List, Optional

import allure
from loguru import logger

from .backends import ModelBackend, VisualTestResult, create_backend
from .config import ModelConfig
from .evidence import EvidenceAttacher
from .highlight import ElementHighlighter
from .interpreter import interpret
from .prompts import build_prompt
from .reducer import reduce_html


class VisualTester:
    """
    Visual assertions for one Playwright page.

    Usage:
        tester = VisualTester(page, config=ModelConfig.from_env())

        result = tester.check("The 4 main browser logos are displayed under the hero banner")
        assert result.success, result.reason

        # Highlight elements yourself for debugging
        tester.highlight_elements(["#hero", "text=Get started"])
    """

    def __init__(
        self,
        page,
        backend: Optional[ModelBackend] = None,
        config: Optional[ModelConfig] = None,
        attacher: Optional[EvidenceAttacher] = None,
        full_page: bool = False,
        max_dom_chars: Optional[int] = None,
    ):
        """
        Initialize the tester.

        Args:
            page: Playwright page object
            backend: ModelBackend instance (shared across testers is fine)
            config: ModelConfig to build the default backend from (ignored if backend given)
            attacher: Evidence attacher (default: Allure attachments)
            full_page: Capture the full scrollable page instead of the viewport
            max_dom_chars: Optional size budget for the reduced DOM

        Raises:
            ConfigurationError: If no backend is given and the configuration is incomplete
        """
        self.page = page
        self.backend = backend or create_backend(config)
        self.attacher = attacher or EvidenceAttacher()
        self.highlighter = ElementHighlighter(page)
        self.full_page = full_page
        self.max_dom_chars = max_dom_chars
        self.history: List[VisualTestResult] = []

    def _get_screenshot(self) -> bytes:
        return self.page.screenshot(full_page=self.full_page)

    def _get_dom_snapshot(self) -> str:
        """Get the reduced DOM of the page to be used as context for the model."""
        with allure.step("Get DOM snapshot"):
            return reduce_html(self.page.content(), max_chars=self.max_dom_chars)

    def check(self, prompt: str) -> VisualTestResult:
        """
        Ask the model whether a visual claim holds on the current page.

        Model and parsing failures do not raise: they come back as a result
        with success=False and the error in the reason.

        Args:
            prompt: Natural language assertion

        Returns:
            VisualTestResult with success, reason and locators

        Examples:
            result = tester.check("30% promotion displayed in header")
            assert result.success, result.reason
        """
        with allure.step("AI Visual Check"):
            start_time = time.time()

            screenshot_b64 = base64.b64encode(self._get_screenshot()).decode("utf-8")
            dom_snapshot = self._get_dom_snapshot()
            message = build_prompt(
                prompt,
                screenshot_b64,
                dom_snapshot,
                structured_output=self.backend.structured_output,
            )

            try:
                raw = self.backend.invoke(message)
                result = interpret(raw, structured_output=self.backend.structured_output)
            except Exception as e:
                error = str(e) or type(e).__name__
                logger.error(f"AI analysis failed: {error}")
                result = VisualTestResult.failure(f"AI analysis failed: {error}")

            if result.locators:
                self._attach_evidence(result.locators)

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                f"Visual check {'PASS' if result.success else 'FAIL'} "
                f"in {duration_ms:.0f}ms: {prompt!r} - {result.reason}"
            )
            self.history.append(result)
            return result

    def _attach_evidence(self, locators: List[str]):
        try:
            self.highlight_elements(locators)
            highlighted = self._get_screenshot()
        except Exception as e:
            logger.warning(f"Could not capture highlighted evidence: {e}")
            return
        self.attacher.attach(highlighted)

    def highlight_elements(self, locators: Iterable[str]) -> List[str]:
        """
        Highlight the elements on the page that were found by the model.

        Args:
            locators: Playwright locators of the elements to highlight

        Returns:
            The locators that matched an element
        """
        return self.highlighter.highlight(locators)


def create_visual_tester(
    page,
    config: Optional[ModelConfig] = None,
    **kwargs,
) -> VisualTester:
    """
    Create a VisualTester with sensible defaults.

    Will read the model configuration from the environment if not provided.

    Args:
        page: Playwright page object
        config: ModelConfig (optional, will check environment)
        **kwargs: Passed through to VisualTester

    Example:
        # Assumes AZURE_OPENAI_* in environment (or a .env file)
        tester = create_visual_tester(page)
    """
    return VisualTester(page, backend=create_backend(config), **kwargs)
