"""枚举定义

包含摘要流水线的结果类型（SummaryOutcome）与快照来源（SnapshotSource）。
"""

from enum import StrEnum


class SummaryOutcome(StrEnum):
    """摘要流水线结果类型"""

    # 正常完成（含 AI 降级与投递失败两种情形）
    COMPLETED = "COMPLETED"
    # 无待办事项，未调用下游服务
    NOTHING_TO_SUMMARIZE = "NOTHING_TO_SUMMARIZE"


class SnapshotSource(StrEnum):
    """待办快照来源"""

    STORE = "store"
    CACHE = "cache"
