"""数据模型 -- TokenUsage + ModelCallResult

Summarizer 调用结果。LiteLLM 调用与本地降级摘要统一返回 ModelCallResult。
"""

from pydantic import BaseModel, Field


class TokenUsage(BaseModel):
    """Token 使用统计

    key 命名对齐 OpenAI/LiteLLM 行业标准：
    prompt_tokens / completion_tokens / total_tokens
    """

    prompt_tokens: int = Field(default=0, ge=0, description="输入 token 数")
    completion_tokens: int = Field(default=0, ge=0, description="输出 token 数")
    total_tokens: int = Field(default=0, ge=0, description="总 token 数")


class ModelCallResult(BaseModel):
    """Summarizer 调用结果

    包含响应内容、路由信息、降级标记等信息。
    """

    # 响应内容
    content: str = Field(description="生成的摘要文本")

    # 路由信息
    model_name: str = Field(default="", description="实际调用的模型名称")
    provider: str = Field(default="", description="实际 provider（如 openrouter），本地降级为 local")

    # 性能指标
    duration_ms: int = Field(default=0, ge=0, description="端到端耗时（毫秒）")

    # Token 使用
    token_usage: TokenUsage = Field(
        default_factory=TokenUsage,
        description="Token 使用详情",
    )

    # 降级信息
    is_fallback: bool = Field(default=False, description="是否为本地降级摘要")
    fallback_reason: str = Field(default="", description="降级原因说明")
