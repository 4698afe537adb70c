"""
Pytest configuration and shared fixtures for visualcheck tests.

Provides fake Playwright pages for unit tests and a real headless Chromium
for the tests that need one.
"""

from typing import Generator, List

import pytest
from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "browser: marks tests that launch a real Chromium")


class FakeLocator:
    """Just enough of playwright's Locator for the highlighter."""

    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    @property
    def first(self) -> "FakeLocator":
        return self

    def count(self) -> int:
        if self.selector in self.page.invalid:
            raise PlaywrightError(f"Unexpected token in selector: {self.selector}")
        return 1 if self.selector in self.page.elements else 0

    def evaluate(self, script: str):
        self.page.scripts.append(script)
        self.page.marked.append(self.selector)


class FakePage:
    """Records what the tester does to the page."""

    def __init__(self, html: str = "", elements=(), invalid=()):
        self.html = html or '<html><body><div id="real-element">Hi</div></body></html>'
        self.elements = set(elements)
        self.invalid = set(invalid)
        self.screenshot_calls: List[bool] = []
        self.style_tags: List[str] = []
        self.marked: List[str] = []
        self.scripts: List[str] = []

    def screenshot(self, full_page: bool = False) -> bytes:
        self.screenshot_calls.append(full_page)
        return b"\x89PNG\r\n\x1a\n-shot-%d" % len(self.screenshot_calls)

    def content(self) -> str:
        return self.html

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def add_style_tag(self, content: str = None, **kwargs):
        self.style_tags.append(content)


@pytest.fixture
def fake_page():
    """Factory for FakePage instances."""
    return FakePage


@pytest.fixture
def log_messages() -> Generator[List[str], None, None]:
    """Warnings and errors logged through loguru during the test."""
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(scope="session")
def chromium():
    """Session-scoped browser; tests are skipped when Chromium is not installed."""
    with sync_playwright() as p:
        try:
            browser = p.chromium.launch(headless=True)
        except PlaywrightError as e:
            pytest.skip(f"Chromium not available: {e}")
        yield browser
        browser.close()


@pytest.fixture
def browser_page(chromium) -> Generator[Page, None, None]:
    """Page fixture that creates a fresh page for each test."""
    page = chromium.new_page()
    yield page
    page.close()

