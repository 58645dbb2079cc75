#!/usr/bin/env python3
"""
Test explicit configuration requirements.
"""

import os
import tempfile

import pytest
import yaml
from pydantic import ValidationError

from zhipu_translate.config import API_KEY_ENV, Configuration
from zhipu_translate.llm.models import TranslationConfig
from zhipu_translate.llm.streaming.models import TaskStatus

VALID_CONFIG = {
    "zhipuai": {
        "endpoint": "https://open.bigmodel.cn/api/paas/v4/chat/completions",
        "model": "glm-4-flash",
        "temperature": 0.2,
        "stream": False,
        "max_tokens": 1200,
    },
    "messages": {"status_pending": "翻译中..."},
    "logging": {"level": "DEBUG"},
}


@pytest.fixture
def write_config():
    """Write YAML content to a temporary file and clean it up afterwards."""
    paths = []

    def _write(content) -> str:
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            if isinstance(content, str):
                f.write(content)
            else:
                yaml.dump(content, f, allow_unicode=True)
            paths.append(f.name)
        return f.name

    yield _write

    for path in paths:
        os.unlink(path)


def with_provider(**overrides) -> dict:
    provider = {**VALID_CONFIG["zhipuai"], **overrides}
    return {**VALID_CONFIG, "zhipuai": provider}


def without_provider_key(key: str) -> dict:
    provider = {k: v for k, v in VALID_CONFIG["zhipuai"].items() if k != key}
    return {**VALID_CONFIG, "zhipuai": provider}


class TestTranslationConfig:
    """Test building the per-request configuration."""

    def test_valid_config(self, write_config):
        config = Configuration(write_config(VALID_CONFIG)).get_translation_config()

        assert config == TranslationConfig(
            endpoint="https://open.bigmodel.cn/api/paas/v4/chat/completions",
            model="glm-4-flash",
            temperature=0.2,
            stream=False,
            max_tokens=1200,
        )

    def test_packaged_defaults_load(self):
        config = Configuration().get_translation_config()
        assert config.max_tokens == 4000
        assert config.stream is True
        assert 0.0 <= config.temperature <= 1.0

    @pytest.mark.parametrize("key", ["endpoint", "model"])
    def test_required_keys(self, write_config, key):
        configuration = Configuration(write_config(without_provider_key(key)))
        with pytest.raises(ValueError, match=f"zhipuai.{key} must be explicitly configured"):
            configuration.get_translation_config()

    @pytest.mark.parametrize("value", [None, 0])
    def test_unset_max_tokens_defaults(self, write_config, value):
        configuration = Configuration(write_config(with_provider(max_tokens=value)))
        assert configuration.get_translation_config().max_tokens == 4000

    def test_missing_max_tokens_defaults(self, write_config):
        configuration = Configuration(write_config(without_provider_key("max_tokens")))
        assert configuration.get_translation_config().max_tokens == 4000

    @pytest.mark.parametrize("overrides, field", [
        ({"temperature": 1.5}, "temperature"),
        ({"temperature": -0.1}, "temperature"),
        ({"max_tokens": -5}, "max_tokens"),
    ])
    def test_out_of_range_values(self, write_config, overrides, field):
        configuration = Configuration(write_config(with_provider(**overrides)))
        with pytest.raises(ValueError, match=field):
            configuration.get_translation_config()

    def test_config_is_frozen(self):
        config = TranslationConfig(endpoint="https://example.test", model="glm-4")
        with pytest.raises(ValidationError):
            config.model = "other"


class TestConfigurationFile:
    """Test YAML loading and auxiliary sections."""

    def test_non_dict_yaml_rejected(self, write_config):
        with pytest.raises(ValueError, match="must be YAML dict"):
            Configuration(write_config("- just\n- a list\n"))

    def test_status_message(self, write_config):
        configuration = Configuration(write_config(VALID_CONFIG))
        assert configuration.get_status_message(TaskStatus.PENDING) == "翻译中..."

    def test_missing_status_message(self, write_config):
        configuration = Configuration(write_config(VALID_CONFIG))
        with pytest.raises(ValueError, match="messages.status_fail"):
            configuration.get_status_message(TaskStatus.FAIL)

    def test_logging_config(self, write_config):
        configuration = Configuration(write_config(VALID_CONFIG))
        assert configuration.get_logging_config() == {"level": "DEBUG"}

    def test_empty_provider_section(self, write_config):
        configuration = Configuration(write_config("zhipuai:\nmessages:\nlogging:\n"))
        with pytest.raises(ValueError, match="zhipuai.endpoint must be explicitly configured"):
            configuration.get_translation_config()

    def test_empty_messages_section(self, write_config):
        configuration = Configuration(write_config("zhipuai:\nmessages:\nlogging:\n"))
        with pytest.raises(ValueError, match="messages.status_pending"):
            configuration.get_status_message(TaskStatus.PENDING)

    def test_empty_logging_section(self, write_config):
        configuration = Configuration(write_config("zhipuai:\nmessages:\nlogging:\n"))
        assert configuration.get_logging_config() == {}

    def test_packaged_messages_cover_pending_only(self):
        configuration = Configuration()
        assert configuration.get_status_message(TaskStatus.PENDING) == "Translating..."
        with pytest.raises(ValueError, match="messages.status_success"):
            configuration.get_status_message(TaskStatus.SUCCESS)


class TestApiKey:
    """Test API key lookup from the environment."""

    def test_api_key_from_environment(self, write_config, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV, "abc.def-1234567890xyz")
        configuration = Configuration(write_config(VALID_CONFIG))
        assert configuration.api_key == "abc.def-1234567890xyz"

    def test_missing_api_key(self, write_config, monkeypatch):
        configuration = Configuration(write_config(VALID_CONFIG))
        monkeypatch.delenv(API_KEY_ENV, raising=False)
        with pytest.raises(ValueError, match=API_KEY_ENV):
            _ = configuration.api_key
