"""
Model provider configuration.

The configuration is read once (usually at test session start), validated,
and then handed explicitly to a backend. Nothing in visualcheck reads the
environment behind your back after that.

Environment variables:
    AZURE_OPENAI_API_KEY            required
    AZURE_OPENAI_ENDPOINT           required
    AZURE_OPENAI_DEPLOYMENT_NAME    required
    AZURE_OPENAI_RESOURCE_NAME      required
    AZURE_OPENAI_API_VERSION        optional (default: 2024-12-01-preview)
    VISUALCHECK_MAX_RETRIES         optional (default: 2)
    VISUALCHECK_TIMEOUT             optional, seconds (default: 60)
    VISUALCHECK_STRUCTURED_OUTPUT   optional, true/false (default: true)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_API_VERSION = "2024-12-01-preview"
DEFAULT_MAX_RETRIES = 2
DEFAULT_TIMEOUT = 60.0

REQUIRED_ENV = {
    "api_key": "AZURE_OPENAI_API_KEY",
    "endpoint": "AZURE_OPENAI_ENDPOINT",
    "deployment": "AZURE_OPENAI_DEPLOYMENT_NAME",
    "resource_name": "AZURE_OPENAI_RESOURCE_NAME",
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ModelConfig:
    """Connection settings for the vision model. Read-only once built."""

    api_key: str
    endpoint: str
    deployment: str
    resource_name: str
    api_version: str = DEFAULT_API_VERSION
    max_retries: int = DEFAULT_MAX_RETRIES
    timeout: Optional[float] = DEFAULT_TIMEOUT
    structured_output: bool = True

    def __post_init__(self):
        for field_name, env_name in REQUIRED_ENV.items():
            if not getattr(self, field_name):
                raise ConfigurationError(f"Missing {env_name} environment variable.")
        if self.max_retries < 0:
            raise ConfigurationError(f"max_retries must be >= 0, got {self.max_retries}")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        load_dotenv_file: bool = True,
    ) -> "ModelConfig":
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)
            load_dotenv_file: Load a .env file into os.environ first

        Raises:
            ConfigurationError: If a required variable is missing or a value is malformed
        """
        if load_dotenv_file:
            load_dotenv()
        env = os.environ if environ is None else environ

        values = {name: env.get(var, "") for name, var in REQUIRED_ENV.items()}
        return cls(
            api_version=env.get("AZURE_OPENAI_API_VERSION") or DEFAULT_API_VERSION,
            max_retries=_parse_int(env, "VISUALCHECK_MAX_RETRIES", DEFAULT_MAX_RETRIES),
            timeout=_parse_float(env, "VISUALCHECK_TIMEOUT", DEFAULT_TIMEOUT),
            structured_output=_parse_bool(env, "VISUALCHECK_STRUCTURED_OUTPUT", True),
            **values,
        )

    def redacted(self) -> dict:
        """Settings safe to log (API key masked)."""
        return {
            "endpoint": self.endpoint,
            "deployment": self.deployment,
            "resource_name": self.resource_name,
            "api_version": self.api_version,
            "max_retries": self.max_retries,
            "timeout": self.timeout,
            "structured_output": self.structured_output,
            "api_key": f"***{self.api_key[-4:]}" if len(self.api_key) > 8 else "***",
        }


def _parse_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def _parse_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if not raw:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigurationError(f"{name} must be true or false, got {raw!r}")
