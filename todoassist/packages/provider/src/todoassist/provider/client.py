"""LiteLLMClient -- Summarizer 调用封装

通过 litellm.acompletion() 调用 OpenAI 兼容 API（默认 OpenRouter）。
每次调用只尝试一次，并受固定超时约束。
"""

import asyncio
import contextlib
import time

import httpx
import structlog
from litellm import acompletion

from .exceptions import ProviderError, ProviderUnreachableError
from .models import ModelCallResult, TokenUsage

log = structlog.get_logger()

# 健康检查超时（硬编码，应快速响应）
HEALTH_CHECK_TIMEOUT_S = 5

# OpenRouter 用于识别调用方应用的请求头
APP_TITLE = "Todo Summary Assistant"

# 连接类异常类型集合（触发 ProviderUnreachableError）
_CONNECTION_ERROR_TYPES = (
    ConnectionError,
    OSError,
    TimeoutError,
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.TimeoutException,
)


def _is_connection_error(e: Exception) -> bool:
    """判断异常是否为连接类错误（API 不可达）"""
    if isinstance(e, _CONNECTION_ERROR_TYPES):
        return True
    # LiteLLM 的 APIConnectionError / Timeout 也属于连接类错误
    error_name = type(e).__name__
    return error_name in ("APIConnectionError", "APITimeoutError", "Timeout")


def _parse_usage(response) -> TokenUsage:
    """从 LiteLLM 响应解析 token 使用数据，失败时返回全零"""
    usage = getattr(response, "usage", None)
    if usage is None:
        return TokenUsage()
    try:
        return TokenUsage(
            prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
            total_tokens=getattr(usage, "total_tokens", 0) or 0,
        )
    except (TypeError, ValueError) as e:
        log.debug("parse_usage_failed", error=str(e))
        return TokenUsage()


class LiteLLMClient:
    """Summarizer 客户端

    封装 litellm.acompletion() 调用，返回 ModelCallResult。
    非 2xx、超时、响应结构异常或内容为空均视为失败并抛出 ProviderError。
    """

    def __init__(
        self,
        model: str,
        api_base: str = "https://openrouter.ai/api/v1",
        api_key: str = "",
        timeout_s: int = 15,
        app_url: str = "",
    ) -> None:
        """初始化 Summarizer 客户端

        Args:
            model: LiteLLM 模型名（如 openrouter/deepseek/deepseek-chat-v3-0324:free）
            api_base: OpenAI 兼容 API 基础 URL
            api_key: API 密钥
            timeout_s: 请求超时（秒）
            app_url: 可选的应用 URL，作为 HTTP-Referer 发送
        """
        self._model = model
        self._api_base = api_base.rstrip("/")
        self._api_key = api_key
        self._timeout_s = timeout_s
        self._extra_headers = {"X-Title": APP_TITLE}
        if app_url:
            self._extra_headers["HTTP-Referer"] = app_url

    @property
    def model(self) -> str:
        return self._model

    async def complete(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs,
    ) -> ModelCallResult:
        """发送 chat completion 请求

        Args:
            messages: 消息列表，格式 [{"role": "system", "content": "..."}, ...]
            temperature: 采样温度
            max_tokens: 最大生成 token 数，None 使用模型默认
            **kwargs: 其他 LiteLLM 支持的参数

        Returns:
            ModelCallResult

        Raises:
            ProviderUnreachableError: 连接失败或超时
            ProviderError: API 返回错误、响应结构异常或内容为空
        """
        start_time = time.monotonic()

        try:
            call_kwargs = {
                "model": self._model,
                "messages": messages,
                "api_base": self._api_base,
                "api_key": self._api_key or None,
                "temperature": temperature,
                "timeout": self._timeout_s,
                "num_retries": 0,
                "extra_headers": self._extra_headers,
                **kwargs,
            }
            if max_tokens is not None:
                call_kwargs["max_tokens"] = max_tokens

            log.debug(
                "litellm_call_start",
                model=self._model,
                message_count=len(messages),
            )

            response = await asyncio.wait_for(
                acompletion(**call_kwargs),
                timeout=self._timeout_s,
            )
            duration_ms = int((time.monotonic() - start_time) * 1000)

            try:
                content = response.choices[0].message.content or ""
            except (AttributeError, IndexError, TypeError) as e:
                raise ProviderError(f"Malformed LLM response: {e}") from e

            if not content.strip():
                raise ProviderError("LLM returned empty content")

            model_name = self._model
            with contextlib.suppress(AttributeError):
                model_name = response.model or self._model

            result = ModelCallResult(
                content=content.strip(),
                model_name=model_name,
                provider=self._model.split("/", 1)[0] if "/" in self._model else "",
                duration_ms=duration_ms,
                token_usage=_parse_usage(response),
                is_fallback=False,
                fallback_reason="",
            )

            log.info(
                "litellm_call_completed",
                model_name=result.model_name,
                provider=result.provider,
                duration_ms=duration_ms,
                total_tokens=result.token_usage.total_tokens,
            )
            return result

        except ProviderError:
            # 已包装的异常直接抛出
            raise
        except Exception as e:
            duration_ms = int((time.monotonic() - start_time) * 1000)
            log.error(
                "litellm_call_failed",
                model=self._model,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=duration_ms,
            )
            if _is_connection_error(e):
                raise ProviderUnreachableError(
                    api_base=self._api_base,
                    original_error=e,
                ) from e
            raise ProviderError(f"LLM call failed: {e}") from e

    async def health_check(self) -> bool:
        """检查 LLM API 可达性

        发送 GET {api_base}/models 请求。

        Returns:
            True 如果 API 返回 200，False 如果不可达或异常

        注意: 此方法不抛出异常，所有异常内部捕获并返回 False。
        """
        url = f"{self._api_base}/models"
        headers = {}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        try:
            async with httpx.AsyncClient() as http_client:
                resp = await http_client.get(
                    url, headers=headers, timeout=HEALTH_CHECK_TIMEOUT_S
                )
                return resp.status_code == 200
        except Exception as e:
            log.debug("health_check_failed", url=url, error=str(e))
            return False
