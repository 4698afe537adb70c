"""
visualcheck - AI-Powered Visual Assertions for Playwright tests

Ask a multimodal model whether a natural-language claim about the page holds:

1. A screenshot and a reduced DOM of the page are captured
2. The model judges the claim and names the elements it relied on
3. Those elements are highlighted and the screenshot is attached to the report

Supported AI Backends:
- Azure OpenAI (default, configured from AZURE_OPENAI_* variables)
- OpenAI (gpt-4o)
- Extensible for custom providers

Quick Start:
    ```python
    from playwright.sync_api import sync_playwright
    from visualcheck import ModelConfig, VisualTester

    config = ModelConfig.from_env()

    with sync_playwright() as p:
        browser = p.chromium.launch()
        page = browser.new_page()
        page.goto("https://playwright.dev/")

        tester = VisualTester(page, config=config)
        result = tester.check("The 4 main browser logos are displayed under the hero banner")
        assert result.success, result.reason

        browser.close()
    ```

Pytest:
    ```python
    # conftest.py
    pytest_plugins = ["visualcheck.pytest_plugin"]

    # test_home.py
    def test_logos(page, ai):
        page.goto("https://playwright.dev/")
        assert ai.check("The browser logos are displayed").success
    ```

Custom Backends:
    ```python
    from visualcheck.backends import ModelBackend

    class MyBackend(ModelBackend):
        structured_output = False

        def invoke(self, prompt):
            return my_client.ask(prompt.content)

    tester = VisualTester(page, backend=MyBackend())
    ```
"""

from .assertions import VisualAssertions
from .backends import (
    AzureOpenAIBackend,
    ModelBackend,
    OpenAIBackend,
    VisualCheckResponse,
    VisualTestResult,
    create_backend,
)
from .config import ModelConfig
from .errors import (
    ConfigurationError,
    HighlightResolutionError,
    InterpretationError,
    ModelInvocationError,
    VisualCheckError,
)
from .evidence import EvidenceAttacher
from .highlight import ElementHighlighter
from .interpreter import interpret
from .prompts import PromptMessage, build_prompt
from .reducer import reduce_html
from .tester import VisualTester, create_visual_tester

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    # Main classes
    "VisualTester",
    "create_visual_tester",
    "VisualTestResult",
    "VisualAssertions",
    "ModelConfig",
    # Backends
    "ModelBackend",
    "AzureOpenAIBackend",
    "OpenAIBackend",
    "VisualCheckResponse",
    "create_backend",
    # Building blocks
    "reduce_html",
    "build_prompt",
    "PromptMessage",
    "interpret",
    "ElementHighlighter",
    "EvidenceAttacher",
    # Errors
    "VisualCheckError",
    "ConfigurationError",
    "ModelInvocationError",
    "InterpretationError",
    "HighlightResolutionError",
]
