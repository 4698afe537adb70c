"""
Prompt construction for visual checks.

A check sends one multimodal user message with three parts, always in this
order: the instructions with the assertion, the screenshot, the reduced DOM.
Keep the order stable; recorded expectations depend on it.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

INSTRUCTIONS = """You are a visual testing assistant. Analyze the provided screenshot and DOM structure to answer the following question: "{assertion}"

You have access to both the visual screenshot and the sanitized HTML structure of the page.
"""

RESPONSE_CONTRACT = """
Please respond with a JSON object containing:
- "success": boolean (true if the condition is met, false otherwise)
- "reason": string (brief explanation of your analysis)
- "locators": array of strings (optional Playwright locators for elements you used in your analysis, e.g., ["text=Submit", "data-testid=login-button", "#header-nav"])
"""

STRUCTURED_RESPONSE_HINT = """
Set "success" to true only if the condition is met, explain your analysis briefly in "reason",
and list in "locators" the Playwright locators of the elements you used in your analysis.
"""

LOCATOR_GUIDE = """
For locators, use standard Playwright selector strategies:
- Text: "text=Button Text"
- CSS: "#id", ".class", "div[data-testid='value']"
- Role: "role=button[name='Submit']"
- Test ID: "data-testid=my-button"

Be precise and focus only on what you can clearly see in the image and/or verify in the DOM structure."""


@dataclass(frozen=True)
class PromptMessage:
    """One multimodal request: question text, screenshot data URI, DOM text."""

    question: str
    image_url: str
    dom: str

    @property
    def dom_text(self) -> str:
        return f"DOM Structure:\n{self.dom}"

    @property
    def content(self) -> List[Dict[str, Any]]:
        """Content parts in send order."""
        return [
            {"type": "text", "text": self.question},
            {"type": "image_url", "image_url": {"url": self.image_url}},
            {"type": "text", "text": self.dom_text},
        ]

    def to_openai_messages(self) -> List[Dict[str, Any]]:
        return [{"role": "user", "content": self.content}]


def build_instructions(assertion: str, structured_output: bool = True) -> str:
    """
    Render the instruction text for an assertion.

    When the provider enforces the response shape, the JSON contract is
    redundant and left out; the locator guide is always included.
    """
    response_block = STRUCTURED_RESPONSE_HINT if structured_output else RESPONSE_CONTRACT
    return INSTRUCTIONS.format(assertion=assertion) + response_block + LOCATOR_GUIDE


def build_prompt(
    assertion: str,
    screenshot_b64: str,
    dom: str,
    structured_output: bool = True,
) -> PromptMessage:
    """
    Build the request for a visual check.

    Args:
        assertion: Natural language claim, embedded verbatim
        screenshot_b64: Base64-encoded PNG screenshot
        dom: Reduced DOM from reduce_html()
        structured_output: Whether the backend enforces the response schema

    Returns:
        PromptMessage ready for a backend
    """
    return PromptMessage(
        question=build_instructions(assertion, structured_output),
        image_url=f"data:image/png;base64,{screenshot_b64}",
        dom=dom,
    )
