"""ProviderConfig / NotifierConfig 加载测试 -- 环境变量映射与默认值"""

import pytest
from pydantic import SecretStr, ValidationError
from todoassist.provider.config import (
    DEFAULT_API_BASE,
    DEFAULT_MODEL,
    NotifierConfig,
    ProviderConfig,
    load_notifier_config,
    load_provider_config,
)

_ENV_VARS = [
    "OPENROUTER_API_KEY",
    "TODOASSIST_LLM_API_BASE",
    "TODOASSIST_LLM_MODEL",
    "TODOASSIST_LLM_MODE",
    "TODOASSIST_LLM_TIMEOUT_S",
    "TODOASSIST_APP_URL",
    "SLACK_WEBHOOK_URL",
    "TODOASSIST_NOTIFIER_TIMEOUT_S",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestProviderConfig:
    def test_defaults_have_no_secret(self):
        config = load_provider_config()
        assert config.api_base == DEFAULT_API_BASE
        assert config.model == DEFAULT_MODEL
        assert config.api_key.get_secret_value() == ""
        assert config.llm_mode == "litellm"
        assert config.timeout_s == 15

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-test")
        monkeypatch.setenv("TODOASSIST_LLM_MODEL", "openrouter/openai/gpt-4o-mini")
        monkeypatch.setenv("TODOASSIST_LLM_MODE", "local")
        monkeypatch.setenv("TODOASSIST_LLM_TIMEOUT_S", "5")
        monkeypatch.setenv("TODOASSIST_APP_URL", "http://localhost:5173")

        config = load_provider_config()
        assert config.api_key.get_secret_value() == "sk-or-test"
        assert config.model == "openrouter/openai/gpt-4o-mini"
        assert config.llm_mode == "local"
        assert config.timeout_s == 5
        assert config.app_url == "http://localhost:5173"

    def test_invalid_timeout_keeps_default(self, monkeypatch):
        monkeypatch.setenv("TODOASSIST_LLM_TIMEOUT_S", "fast")
        assert load_provider_config().timeout_s == 15

    def test_invalid_mode_rejected(self, monkeypatch):
        monkeypatch.setenv("TODOASSIST_LLM_MODE", "echo")
        with pytest.raises(ValidationError):
            load_provider_config()

    def test_timeout_min_value(self):
        with pytest.raises(ValidationError):
            ProviderConfig(timeout_s=0)


class TestNotifierConfig:
    def test_defaults(self):
        config = load_notifier_config()
        assert config.is_configured is False
        assert config.timeout_s == 10

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.slack.com/services/T/B/X")
        monkeypatch.setenv("TODOASSIST_NOTIFIER_TIMEOUT_S", "4")

        config = load_notifier_config()
        assert config.is_configured is True
        assert config.looks_like_slack is True
        assert config.timeout_s == 4
        assert "hooks.slack.com" not in repr(config)

    def test_non_slack_url_detected(self):
        config = NotifierConfig(webhook_url=SecretStr("https://example.com/hook"))
        assert config.is_configured is True
        assert config.looks_like_slack is False
