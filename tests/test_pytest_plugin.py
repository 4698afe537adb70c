"""Tests for the pytest fixtures shipped in visualcheck.pytest_plugin."""

import pytest

from visualcheck import VisualTester
from visualcheck.backends import ModelBackend, VisualCheckResponse


class StaticBackend(ModelBackend):
    def invoke(self, prompt):
        return VisualCheckResponse(success=True, reason="Looks right", locators=[])


@pytest.fixture
def page(fake_page):
    """Replaces pytest-playwright's page."""
    return fake_page()


@pytest.fixture(scope="session")
def visual_backend():
    """Replaces the environment-configured backend."""
    return StaticBackend()


class TestAiFixture:
    """The ai fixture wires a VisualTester to the page."""

    def test_ai_is_bound_to_page(self, ai, page, visual_backend):
        """Should build a tester for this test's page and the shared backend."""
        assert isinstance(ai, VisualTester)
        assert ai.page is page
        assert ai.backend is visual_backend

    def test_ai_checks(self, ai):
        """Should run checks end to end through the fixture."""
        result = ai.check("The page says Hi")

        assert result.success
        assert result.reason == "Looks right"

    def test_marker_registered(self, pytestconfig):
        """Should register the ai_visual marker."""
        markers = pytestconfig.getini("markers")
        assert any(marker.startswith("ai_visual:") for marker in markers)
