"""
Abstract base interface for model backends.

This module defines the result types shared by every backend and the
contract a backend must implement. Backends can be swapped out to use
different providers, or a fake in tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field

from ..prompts import PromptMessage

DEFAULT_REASON = "No reason provided"


@dataclass
class VisualTestResult:
    """Verdict of a visual check."""

    success: bool
    reason: str = DEFAULT_REASON
    locators: List[str] = field(default_factory=list)  # Playwright locators the model relied on

    def __post_init__(self):
        if not self.reason:
            self.reason = DEFAULT_REASON
        if self.locators is None:
            self.locators = []
        else:
            self.locators = list(self.locators)

    @classmethod
    def failure(cls, reason: str) -> "VisualTestResult":
        return cls(success=False, reason=reason, locators=[])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "reason": self.reason,
            "locators": list(self.locators),
        }


class VisualCheckResponse(BaseModel):
    """Response shape enforced by providers that support structured output."""

    success: bool = Field(description="True if the condition is met, false otherwise")
    reason: str = Field(description="Brief explanation of the analysis")
    locators: List[str] = Field(
        default_factory=list,
        description="Playwright locators for elements used in the analysis",
    )


# Structured backends return a VisualCheckResponse (or an equivalent dict),
# free-text backends return the raw message text.
RawModelOutput = Union[VisualCheckResponse, Dict[str, Any], str]


class ModelBackend(ABC):
    """
    Abstract interface for model backends.

    Implement this interface to add support for new providers.

    Example:
        class MyBackend(ModelBackend):
            structured_output = False

            def invoke(self, prompt):
                return my_client.ask(prompt.content)
    """

    # True when invoke() returns schema-conforming objects rather than text
    structured_output: bool = True

    @abstractmethod
    def invoke(self, prompt: PromptMessage) -> RawModelOutput:
        """
        Send a prompt to the model.

        Args:
            prompt: PromptMessage built by build_prompt()

        Returns:
            A VisualCheckResponse (structured mode) or raw text (free-text mode)

        Raises:
            ModelInvocationError: If the call fails after the client's retries
        """
        pass
