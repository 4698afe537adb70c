"""
Attach evidence screenshots to the running test's Allure report.
"""

import allure
from loguru import logger

DEFAULT_ATTACHMENT_NAME = "ai-analysis-highlighted"


class EvidenceAttacher:
    """Best-effort PNG attachment to the current test case."""

    def attach(self, screenshot: bytes, name: str = DEFAULT_ATTACHMENT_NAME) -> bool:
        """
        Attach a screenshot to the report.

        Args:
            screenshot: PNG bytes
            name: Attachment name

        Returns:
            True if attached; failures are logged, never raised
        """
        try:
            allure.attach(
                screenshot,
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )
        except Exception as e:
            logger.warning(f"Could not attach '{name}' to the report: {e}")
            return False
        return True
