"""Todo Assistant Provider -- 外部服务调用层

Summarizer（LLM）与 Chat Notifier（Slack webhook）的公开接口导出。
"""

# 核心组件
from .client import LiteLLMClient

# 配置
from .config import (
    NotifierConfig,
    ProviderConfig,
    load_notifier_config,
    load_provider_config,
)

# 异常
from .exceptions import DeliveryError, ProviderError, ProviderUnreachableError

# 数据模型
from .models import ModelCallResult, TokenUsage
from .notifier import SlackWebhookNotifier, build_slack_payload

__all__ = [
    "ModelCallResult",
    "TokenUsage",
    "LiteLLMClient",
    "SlackWebhookNotifier",
    "build_slack_payload",
    "ProviderConfig",
    "NotifierConfig",
    "load_provider_config",
    "load_notifier_config",
    "ProviderError",
    "ProviderUnreachableError",
    "DeliveryError",
]
