"""
Pytest fixtures for visual checks.

Enable in a conftest.py:

    pytest_plugins = ["visualcheck.pytest_plugin"]

Then use the ``ai`` fixture next to pytest-playwright's ``page``:

    def test_logos(page, ai):
        page.goto("https://playwright.dev/")
        result = ai.check("The 4 main browser logos are displayed under the hero banner")
        assert result.success, result.reason
"""

import pytest
from loguru import logger

from .backends import ModelBackend, create_backend
from .config import ModelConfig
from .tester import VisualTester


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "ai_visual: marks tests as AI visual checks (need model credentials)",
    )


@pytest.fixture(scope="session")
def visual_model_config() -> ModelConfig:
    """Model configuration, read once per session."""
    config = ModelConfig.from_env()
    logger.info(f"Visual check model config: {config.redacted()}")
    return config


@pytest.fixture(scope="session")
def visual_backend(visual_model_config) -> ModelBackend:
    """One backend shared by every test in the session."""
    return create_backend(visual_model_config)


@pytest.fixture
def ai(page, visual_backend) -> VisualTester:
    """VisualTester bound to the current test's page."""
    return VisualTester(page, backend=visual_backend)
