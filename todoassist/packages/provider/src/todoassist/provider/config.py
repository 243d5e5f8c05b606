"""ProviderConfig / NotifierConfig -- 外部服务配置加载

从环境变量加载配置。API key 与 webhook URL 均为密钥，
只从环境变量读取，不提供字面量默认值。
"""

import os
from typing import Literal

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()

DEFAULT_API_BASE = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "openrouter/deepseek/deepseek-chat-v3-0324:free"
SLACK_WEBHOOK_PREFIX = "https://hooks.slack.com/"


class ProviderConfig(BaseModel):
    """Summarizer 配置 -- 从环境变量加载

    环境变量:
        OPENROUTER_API_KEY: LLM API 密钥
        TODOASSIST_LLM_API_BASE: OpenAI 兼容 API 地址（默认 OpenRouter）
        TODOASSIST_LLM_MODEL: LiteLLM 模型名（含 provider 前缀）
        TODOASSIST_LLM_MODE: 运行模式（litellm/local）
        TODOASSIST_LLM_TIMEOUT_S: 调用超时（秒，默认 15）
        TODOASSIST_APP_URL: 应用 URL（可选）
    """

    api_base: str = Field(default=DEFAULT_API_BASE, description="LLM API 基础 URL")
    api_key: SecretStr = Field(default=SecretStr(""), description="LLM API 密钥")
    model: str = Field(default=DEFAULT_MODEL, description="LiteLLM 模型名")
    llm_mode: Literal["litellm", "local"] = Field(
        default="litellm",
        description="运行模式：litellm 调用远程模型 / local 始终使用本地摘要",
    )
    timeout_s: int = Field(default=15, ge=1, description="LLM 调用超时（秒）")
    app_url: str = Field(default="", description="应用 URL，作为 HTTP-Referer 发送")


class NotifierConfig(BaseModel):
    """Chat Notifier 配置 -- 从环境变量加载

    环境变量:
        SLACK_WEBHOOK_URL: Slack incoming webhook 地址
        TODOASSIST_NOTIFIER_TIMEOUT_S: 投递超时（秒，默认 10）
    """

    webhook_url: SecretStr = Field(
        default=SecretStr(""),
        description="Slack incoming webhook 地址",
    )
    timeout_s: int = Field(default=10, ge=1, description="投递超时（秒）")

    @property
    def is_configured(self) -> bool:
        return bool(self.webhook_url.get_secret_value())

    @property
    def looks_like_slack(self) -> bool:
        return self.webhook_url.get_secret_value().startswith(SLACK_WEBHOOK_PREFIX)


def _parse_timeout(env_var: str, fallback: int) -> int | None:
    """解析超时环境变量，非法值记录警告并返回 None（使用默认值）"""
    val = os.environ.get(env_var)
    if not val:
        return None
    try:
        return int(val)
    except ValueError:
        log.warning(
            "invalid_timeout_config",
            env_var=env_var,
            value=val,
            fallback=fallback,
        )
        return None


def load_provider_config() -> ProviderConfig:
    """从环境变量加载 Summarizer 配置

    Returns:
        ProviderConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("OPENROUTER_API_KEY"):
        kwargs["api_key"] = SecretStr(val)

    if val := os.environ.get("TODOASSIST_LLM_API_BASE"):
        kwargs["api_base"] = val

    if val := os.environ.get("TODOASSIST_LLM_MODEL"):
        kwargs["model"] = val

    if val := os.environ.get("TODOASSIST_LLM_MODE"):
        kwargs["llm_mode"] = val

    if (timeout := _parse_timeout("TODOASSIST_LLM_TIMEOUT_S", 15)) is not None:
        kwargs["timeout_s"] = timeout

    if val := os.environ.get("TODOASSIST_APP_URL"):
        kwargs["app_url"] = val

    return ProviderConfig(**kwargs)


def load_notifier_config() -> NotifierConfig:
    """从环境变量加载 Notifier 配置

    Returns:
        NotifierConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("SLACK_WEBHOOK_URL"):
        kwargs["webhook_url"] = SecretStr(val)

    if (timeout := _parse_timeout("TODOASSIST_NOTIFIER_TIMEOUT_S", 10)) is not None:
        kwargs["timeout_s"] = timeout

    return NotifierConfig(**kwargs)
