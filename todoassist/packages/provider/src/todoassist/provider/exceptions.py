"""Provider 异常体系

Summarizer（LLM）与 Notifier（聊天 webhook）两类外部服务的错误。
"""


class ProviderError(Exception):
    """Provider 包基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 是否可通过降级恢复
        """
        super().__init__(message)
        self.recoverable = recoverable


class ProviderUnreachableError(ProviderError):
    """LLM API 不可达（连接失败、超时、DNS 解析失败等）"""

    def __init__(self, api_base: str, original_error: Exception) -> None:
        """
        Args:
            api_base: 尝试连接的 API 地址
            original_error: 原始异常
        """
        super().__init__(
            f"LLM API unreachable: {api_base} -- {original_error}",
            recoverable=True,
        )
        self.api_base = api_base
        self.original_error = original_error


class DeliveryError(ProviderError):
    """聊天 webhook 投递失败

    message 直接作为诊断信息返回给调用方（deliveryError 字段）。
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """
        Args:
            message: 诊断信息
            status_code: webhook 返回的 HTTP 状态码，未收到响应时为 None
        """
        super().__init__(message, recoverable=True)
        self.status_code = status_code
