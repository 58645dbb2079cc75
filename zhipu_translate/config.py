"""Configuration management for the ZhipuAI translation client."""

import os
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from .llm.models import DEFAULT_MAX_TOKENS, TranslationConfig
from .llm.streaming.models import TaskStatus

API_KEY_ENV = "ZHIPUAI_API_KEY"
DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")


class Configuration:
    """Manages configuration and environment variables for translation requests."""

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize configuration from YAML and environment variables."""
        self.load_env()  # Load .env for the API key
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self._config = self._load_yaml_config(self.config_path)

    @staticmethod
    def load_env() -> None:
        """Load environment variables from .env file."""
        load_dotenv()

    @staticmethod
    def _load_yaml_config(config_path: str) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(config_path) as file:
            config = yaml.safe_load(file)
            if not isinstance(config, dict):
                raise ValueError(
                    f"Config file must be YAML dict, got {type(config)}"
                )
            return config

    @property
    def api_key(self) -> str:
        """Get the ZhipuAI API key.

        Raises:
            ValueError: If the API key is not found in environment variables.
        """
        api_key = os.getenv(API_KEY_ENV)
        if not api_key:
            raise ValueError(
                f"API key '{API_KEY_ENV}' not found in environment variables"
            )
        return api_key

    def get_translation_config(self) -> TranslationConfig:
        """Get the validated request configuration from the ``zhipuai`` section.

        Returns:
            Frozen TranslationConfig for one or more translation tasks.

        Raises:
            ValueError: If required keys are missing or values are out of range.
        """
        provider_config = self._config.get("zhipuai") or {}

        for key in ("endpoint", "model"):
            if not provider_config.get(key):
                raise ValueError(
                    f"zhipuai.{key} must be explicitly configured in config.yaml"
                )

        values = {**provider_config}
        # An unset or zero token limit falls back to the default
        if not values.get("max_tokens"):
            values["max_tokens"] = DEFAULT_MAX_TOKENS

        try:
            return TranslationConfig(**values)
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(part) for part in error["loc"]) for error in e.errors()
            )
            raise ValueError(f"Invalid zhipuai configuration ({fields}): {e}") from e

    def get_status_message(self, status: TaskStatus) -> str:
        """Get the localized placeholder text shown for a task status.

        Raises:
            ValueError: If no message is configured for the status.
        """
        messages = self._config.get("messages") or {}
        key = f"status_{status.value}"
        if key not in messages:
            raise ValueError(
                f"messages.{key} must be explicitly configured in config.yaml"
            )
        return messages[key]

    def get_logging_config(self) -> dict[str, Any]:
        """Get logging configuration from YAML."""
        return self._config.get("logging") or {}
