"""
Error taxonomy for visualcheck.

Only ConfigurationError crosses the public boundary. Everything else is
raised internally and turned into data (a failed VisualTestResult or a
logged warning) by the component that owns it.
"""


class VisualCheckError(Exception):
    """Base class for all visualcheck errors."""


class ConfigurationError(VisualCheckError):
    """A required startup setting (credential, endpoint, deployment) is missing."""


class ModelInvocationError(VisualCheckError):
    """The model call failed after the client's retries, or was rejected."""


class InterpretationError(VisualCheckError):
    """The model output could not be turned into a VisualTestResult."""


class HighlightResolutionError(VisualCheckError):
    """A locator matched nothing or could not be resolved."""

    def __init__(self, locator: str, message: str = "No element matched"):
        self.locator = locator
        super().__init__(f"{message}: {locator}")
