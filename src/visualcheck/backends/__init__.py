"""
Model backends for visualcheck.

This module provides pluggable model backends for visual checks.
Each backend implements the ModelBackend interface.

Available Backends:
    - AzureOpenAIBackend: Azure OpenAI deployment (default)
    - OpenAIBackend: OpenAI API (gpt-4o)

You can also implement custom backends by extending ModelBackend.

Example:
    ```python
    from visualcheck.backends import AzureOpenAIBackend
    from visualcheck import ModelConfig, VisualTester

    backend = AzureOpenAIBackend.from_config(ModelConfig.from_env())
    tester = VisualTester(page, backend=backend)
    ```
"""

from .base import (
    DEFAULT_REASON,
    ModelBackend,
    RawModelOutput,
    VisualCheckResponse,
    VisualTestResult,
)
from .openai import AzureOpenAIBackend, OpenAIBackend, create_backend

__all__ = [
    "ModelBackend",
    "RawModelOutput",
    "VisualCheckResponse",
    "VisualTestResult",
    "DEFAULT_REASON",
    "OpenAIBackend",
    "AzureOpenAIBackend",
    "create_backend",
]
