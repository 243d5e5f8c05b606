"""Store 异常体系

所有后端（SQLite / Supabase / 内存）的故障统一包装为 StoreError 子类，
调用方据此降级到 TodoCache。
"""


class StoreError(Exception):
    """Store 基础异常"""


class StoreUnavailableError(StoreError):
    """后端不可达或执行失败（连接失败、超时、SQL 错误、非 2xx 响应等）"""

    def __init__(self, backend: str, original_error: Exception | str) -> None:
        """
        Args:
            backend: 后端名称（sqlite/supabase/memory）
            original_error: 原始异常或错误描述
        """
        super().__init__(f"Todo store ({backend}) unavailable: {original_error}")
        self.backend = backend
        self.original_error = original_error
