"""
OpenAI / Azure OpenAI backend implementation for visualcheck.

Supports GPT-4o class vision models, either with provider-enforced
structured output (default) or plain text responses.
"""

from typing import Optional

import openai
from loguru import logger

from ..config import ModelConfig
from ..errors import ModelInvocationError
from ..prompts import PromptMessage
from .base import ModelBackend, RawModelOutput, VisualCheckResponse


class OpenAIBackend(ModelBackend):
    """
    OpenAI implementation of ModelBackend.

    Uses the Chat Completions API with vision capabilities. Retries of
    transient failures are left to the SDK (max_retries).

    Example:
        ```python
        backend = OpenAIBackend(api_key="your-openai-api-key", model="gpt-4o")
        tester = VisualTester(page, backend=backend)
        ```
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o",
        max_retries: int = 2,
        timeout: Optional[float] = None,
        structured_output: bool = True,
        max_tokens: int = 1000,
        client=None,
    ):
        """
        Initialize OpenAI backend.

        Args:
            api_key: OpenAI API key (ignored when client is given)
            model: Model name, or deployment name on Azure
            max_retries: Automatic retries for transient failures
            timeout: Per-request timeout in seconds
            structured_output: Ask the provider to enforce the response schema
            max_tokens: Completion token limit
            client: Pre-built OpenAI-compatible client
        """
        self.model = model
        self.structured_output = structured_output
        self.max_tokens = max_tokens
        self.client = client or openai.OpenAI(
            api_key=api_key,
            max_retries=max_retries,
            timeout=timeout,
        )

    def invoke(self, prompt: PromptMessage) -> RawModelOutput:
        """Send the prompt, returning a parsed response or the raw text."""
        logger.debug(
            f"Sending visual check to {self.model} "
            f"(structured={self.structured_output}, dom={len(prompt.dom)} chars)"
        )
        try:
            if self.structured_output:
                return self._invoke_structured(prompt)
            return self._invoke_text(prompt)
        except openai.OpenAIError as e:
            raise ModelInvocationError(f"{type(e).__name__}: {e}") from e

    def _invoke_structured(self, prompt: PromptMessage) -> VisualCheckResponse:
        completion = self.client.chat.completions.parse(
            model=self.model,
            messages=prompt.to_openai_messages(),
            response_format=VisualCheckResponse,
            max_tokens=self.max_tokens,
        )
        if not completion.choices:
            raise ModelInvocationError("No response from AI model")

        message = completion.choices[0].message
        if getattr(message, "refusal", None):
            raise ModelInvocationError(f"Model refused the request: {message.refusal}")
        if message.parsed is None:
            raise ModelInvocationError("Model response did not match the expected schema")

        logger.debug("Received structured visual check response")
        return message.parsed

    def _invoke_text(self, prompt: PromptMessage) -> str:
        completion = self.client.chat.completions.create(
            model=self.model,
            messages=prompt.to_openai_messages(),
            max_tokens=self.max_tokens,
        )
        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise ModelInvocationError("No response from AI model")

        logger.debug(f"Received text visual check response ({len(content)} chars)")
        return content if isinstance(content, str) else str(content)


class AzureOpenAIBackend(OpenAIBackend):
    """
    Azure OpenAI implementation of ModelBackend.

    Example:
        ```python
        config = ModelConfig.from_env()
        backend = AzureOpenAIBackend.from_config(config)
        ```
    """

    def __init__(self, config: ModelConfig, max_tokens: int = 1000, client=None):
        """
        Initialize Azure OpenAI backend.

        Args:
            config: Validated ModelConfig; the deployment is used as the model
            max_tokens: Completion token limit
            client: Pre-built AzureOpenAI-compatible client
        """
        self.config = config
        client = client or openai.AzureOpenAI(
            api_key=config.api_key,
            azure_endpoint=config.endpoint,
            azure_deployment=config.deployment,
            api_version=config.api_version,
            max_retries=config.max_retries,
            timeout=config.timeout,
        )
        super().__init__(
            model=config.deployment,
            structured_output=config.structured_output,
            max_tokens=max_tokens,
            client=client,
        )
        logger.info(
            f"Azure OpenAI backend ready for deployment '{config.deployment}' "
            f"on {config.endpoint} (api_version={config.api_version})"
        )

    @classmethod
    def from_config(cls, config: ModelConfig) -> "AzureOpenAIBackend":
        return cls(config)


def create_backend(config: Optional[ModelConfig] = None) -> ModelBackend:
    """
    Create the default backend.

    Args:
        config: ModelConfig to use (default: read from the environment)

    Raises:
        ConfigurationError: If required settings are missing
    """
    return AzureOpenAIBackend.from_config(config or ModelConfig.from_env())
