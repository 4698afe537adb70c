"""Tests for model configuration."""

import pytest

from visualcheck.config import DEFAULT_API_VERSION, ModelConfig
from visualcheck.errors import ConfigurationError

FULL_ENV = {
    "AZURE_OPENAI_API_KEY": "sk-test-1234567890",
    "AZURE_OPENAI_ENDPOINT": "https://my-resource.openai.azure.com/",
    "AZURE_OPENAI_DEPLOYMENT_NAME": "gpt-4o",
    "AZURE_OPENAI_RESOURCE_NAME": "my-resource",
}


class TestFromEnv:
    """Test ModelConfig.from_env()."""

    def test_required_values(self):
        """Should read the required variables and apply defaults."""
        config = ModelConfig.from_env(FULL_ENV, load_dotenv_file=False)

        assert config.api_key == "sk-test-1234567890"
        assert config.endpoint == "https://my-resource.openai.azure.com/"
        assert config.deployment == "gpt-4o"
        assert config.resource_name == "my-resource"
        assert config.api_version == DEFAULT_API_VERSION == "2024-12-01-preview"
        assert config.max_retries == 2
        assert config.structured_output is True

    @pytest.mark.parametrize("missing", sorted(FULL_ENV))
    def test_missing_required_value(self, missing):
        """Should name the missing variable."""
        env = {k: v for k, v in FULL_ENV.items() if k != missing}

        with pytest.raises(ConfigurationError, match=missing):
            ModelConfig.from_env(env, load_dotenv_file=False)

    def test_empty_value_counts_as_missing(self):
        """Should reject empty strings."""
        env = dict(FULL_ENV, AZURE_OPENAI_API_KEY="")

        with pytest.raises(ConfigurationError, match="AZURE_OPENAI_API_KEY"):
            ModelConfig.from_env(env, load_dotenv_file=False)

    def test_optional_overrides(self):
        """Should read optional variables."""
        env = dict(
            FULL_ENV,
            AZURE_OPENAI_API_VERSION="2024-10-21",
            VISUALCHECK_MAX_RETRIES="5",
            VISUALCHECK_TIMEOUT="12.5",
            VISUALCHECK_STRUCTURED_OUTPUT="false",
        )
        config = ModelConfig.from_env(env, load_dotenv_file=False)

        assert config.api_version == "2024-10-21"
        assert config.max_retries == 5
        assert config.timeout == 12.5
        assert config.structured_output is False

    @pytest.mark.parametrize(
        "name,value",
        [
            ("VISUALCHECK_MAX_RETRIES", "two"),
            ("VISUALCHECK_TIMEOUT", "soon"),
            ("VISUALCHECK_STRUCTURED_OUTPUT", "maybe"),
        ],
    )
    def test_malformed_optional_values(self, name, value):
        """Should fail fast on values it cannot parse."""
        with pytest.raises(ConfigurationError, match=name):
            ModelConfig.from_env(dict(FULL_ENV, **{name: value}), load_dotenv_file=False)

    def test_reads_os_environ(self, monkeypatch):
        """Should default to the process environment."""
        for key, value in FULL_ENV.items():
            monkeypatch.setenv(key, value)

        config = ModelConfig.from_env(load_dotenv_file=False)

        assert config.deployment == "gpt-4o"


class TestModelConfig:
    """Direct construction."""

    def test_negative_retries_rejected(self):
        """Should reject a negative retry budget."""
        with pytest.raises(ConfigurationError):
            ModelConfig(
                api_key="k", endpoint="e", deployment="d", resource_name="r", max_retries=-1
            )

    def test_frozen(self):
        """Should be read-only after construction."""
        config = ModelConfig.from_env(FULL_ENV, load_dotenv_file=False)

        with pytest.raises(Exception):
            config.api_key = "other"

    def test_redacted_hides_key(self):
        """Should mask the API key for logging."""
        config = ModelConfig.from_env(FULL_ENV, load_dotenv_file=False)
        redacted = config.redacted()

        assert "sk-test-1234567890" not in str(redacted)
        assert redacted["api_key"] == "***7890"
        assert redacted["deployment"] == "gpt-4o"
