"""SlackWebhookNotifier -- Chat Notifier 封装

将摘要文本封装为 Slack Block Kit 消息（header / section / context），
通过 httpx POST 到 incoming webhook。每次调用只尝试一次，受固定超时约束。
失败统一抛出 DeliveryError，message 即为返回给调用方的诊断信息。
"""

from datetime import UTC, datetime

import httpx
import structlog

from .exceptions import DeliveryError

log = structlog.get_logger()

# Slack section block 文本长度上限
SECTION_TEXT_MAX_CHARS = 3000

_TRUNCATION_SUFFIX = "\n... (truncated)"


def _truncate(text: str, limit: int = SECTION_TEXT_MAX_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - len(_TRUNCATION_SUFFIX)] + _TRUNCATION_SUFFIX


def build_slack_payload(
    summary: str,
    pending_count: int,
    generated_at: datetime | None = None,
) -> dict:
    """构建 Slack incoming webhook 消息体

    Args:
        summary: 摘要文本（AI 生成或本地降级）
        pending_count: 待办数量
        generated_at: 生成时间，默认当前 UTC 时间

    Returns:
        包含纯文本 text 与 blocks 的 JSON 字典
    """
    generated_at = generated_at or datetime.now(UTC)
    timestamp = generated_at.strftime("%Y-%m-%d %H:%M UTC")
    return {
        "text": "*Todo Summary*",
        "blocks": [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": "📋 Todo Summary", "emoji": True},
            },
            {
                "type": "section",
                "text": {"type": "mrkdwn", "text": _truncate(summary)},
            },
            {
                "type": "context",
                "elements": [
                    {
                        "type": "mrkdwn",
                        "text": f"*Pending Tasks:* {pending_count} | Generated on {timestamp}",
                    }
                ],
            },
        ],
    }


class SlackWebhookNotifier:
    """Slack incoming webhook 投递客户端"""

    def __init__(
        self,
        webhook_url: str,
        timeout_s: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            webhook_url: Slack incoming webhook 地址（密钥，不写入日志）
            timeout_s: 投递超时（秒）
            transport: 自定义 httpx transport（测试注入 MockTransport）
        """
        self._webhook_url = webhook_url
        self._timeout_s = timeout_s
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._webhook_url)

    async def notify(self, text: str, pending_count: int) -> None:
        """投递摘要到 Slack

        Args:
            text: 摘要文本
            pending_count: 待办数量（写入 context block）

        Raises:
            DeliveryError: webhook 未配置、请求失败或返回非 2xx
        """
        if not self._webhook_url:
            raise DeliveryError("Slack webhook URL is not configured")

        payload = build_slack_payload(text, pending_count)

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_s,
                transport=self._transport,
            ) as http_client:
                resp = await http_client.post(self._webhook_url, json=payload)
        except httpx.HTTPError as e:
            reason = str(e) or type(e).__name__
            log.warning(
                "slack_webhook_request_failed",
                error=reason,
                error_type=type(e).__name__,
            )
            raise DeliveryError(f"Slack webhook request failed: {reason}") from e

        if not resp.is_success:
            log.warning("slack_webhook_rejected", status_code=resp.status_code)
            raise DeliveryError(
                f"Slack webhook returned {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
            )

        log.info("slack_webhook_delivered", status_code=resp.status_code)
