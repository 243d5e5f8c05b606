"""SummaryResult -- 一次摘要流水线运行的结果

不持久化，返回给调用方后即丢弃。
"""

from pydantic import BaseModel, Field

from .enums import SnapshotSource, SummaryOutcome


class SummaryResult(BaseModel):
    """摘要流水线结果

    - COMPLETED: summary 必然非空；delivered=False 时 delivery_error 给出诊断信息
    - NOTHING_TO_SUMMARIZE: summary 为 None，未调用 summarizer 与 notifier
    """

    outcome: SummaryOutcome = Field(description="结果类型")
    success: bool = Field(default=True, description="操作是否成功")
    message: str = Field(description="面向用户的结果说明")
    summary: str | None = Field(default=None, description="摘要文本（AI 生成或本地降级）")
    delivered: bool = Field(default=False, description="是否已投递到聊天 webhook")
    delivery_error: str | None = Field(default=None, description="投递失败原因")

    # 诊断信息
    pending_count: int = Field(default=0, ge=0, description="待办数量")
    is_fallback: bool = Field(default=False, description="摘要是否为本地降级文本")
    source: SnapshotSource = Field(
        default=SnapshotSource.STORE,
        description="待办快照来源（store 或 cache）",
    )
