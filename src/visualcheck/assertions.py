"""
Visual Assertions

High-level assertion helpers that wrap VisualTester.check().
Provides pytest-friendly assertion syntax.
"""

from typing import Optional

from .backends import VisualTestResult


class VisualAssertions:
    """
    Collection of visual assertions using AI.

    Usage:
        assertions = VisualAssertions(tester)

        assertions.page_shows("A login form with email and password fields")
        assertions.no_errors()
        assertions.element_visible("Submit button")
    """

    def __init__(self, tester):
        self.tester = tester

    def _expect(self, claim: str, message: str) -> VisualTestResult:
        result = self.tester.check(claim)
        if not result.success:
            raise AssertionError(f"{message}: {result.reason}")
        return result

    def page_shows(self, description: str) -> VisualTestResult:
        """Assert that the page shows something matching the description."""
        return self._expect(description, f"Page does not show: {description}")

    def element_visible(self, description: str) -> VisualTestResult:
        """Assert that an element matching the description is visible."""
        return self._expect(
            f"An element matching '{description}' should be visible on the page",
            f"Element not visible: {description}",
        )

    def element_not_visible(self, description: str) -> VisualTestResult:
        """Assert that an element is NOT visible."""
        return self._expect(
            f"No element matching '{description}' should be visible",
            f"Element is still visible: {description}",
        )

    def text_present(self, text: str) -> VisualTestResult:
        """Assert that specific text is present on the page."""
        return self._expect(
            f"The text '{text}' should be visible somewhere on the page",
            f"Text not found: {text}",
        )

    def no_errors(self, context: Optional[str] = None) -> VisualTestResult:
        """Assert that no error messages are visible."""
        claim = "The page should not display any error messages, broken layouts, or crash screens"
        if context:
            claim += f" ({context})"
        return self._expect(claim, "Errors detected on page")
