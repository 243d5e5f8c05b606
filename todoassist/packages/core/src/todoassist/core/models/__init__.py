"""Todo Assistant Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import SnapshotSource, SummaryOutcome
from .summary import SummaryResult
from .todo import Todo, TodoCreate, TodoUpdate

__all__ = [
    # 枚举
    "SummaryOutcome",
    "SnapshotSource",
    # Todo
    "Todo",
    "TodoCreate",
    "TodoUpdate",
    # Summary
    "SummaryResult",
]
