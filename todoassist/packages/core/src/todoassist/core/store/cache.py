"""TodoCache -- 最近一次已知的 todo 快照

由应用 lifespan 创建并显式传入 TodoService 与 SummaryPipeline，
Store 不可达时作为非权威的降级数据源（可能过期）。
测试可直接构造带确定内容的实例。
"""

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from ..models.todo import Todo


class TodoCache:
    """todo 快照缓存 -- 顺序与 store 返回顺序一致（最新在前）"""

    def __init__(self, todos: Iterable[Todo] = ()) -> None:
        self._todos: dict[str, Todo] = {t.id: t for t in todos}
        self._refreshed_at: datetime | None = None

    def __len__(self) -> int:
        return len(self._todos)

    @property
    def refreshed_at(self) -> datetime | None:
        """最近一次从 store 整体刷新的时间，从未刷新时为 None"""
        return self._refreshed_at

    def snapshot(self) -> list[Todo]:
        """返回当前快照的副本"""
        return [t.model_copy() for t in self._todos.values()]

    def replace(self, todos: Iterable[Todo]) -> None:
        """用 store 读取结果整体替换快照"""
        self._todos = {t.id: t.model_copy() for t in todos}
        self._refreshed_at = datetime.now(UTC)

    def put(self, todo: Todo) -> None:
        """写入单条 todo；新条目放在最前"""
        if todo.id in self._todos:
            self._todos[todo.id] = todo.model_copy()
        else:
            self._todos = {todo.id: todo.model_copy(), **self._todos}

    def patch(self, todo_id: str, changes: dict[str, Any]) -> Todo | None:
        """对缓存中的 todo 应用字段子集，id 不存在时返回 None"""
        current = self._todos.get(todo_id)
        if current is None:
            return None
        updated = Todo.model_validate({**current.model_dump(), **changes})
        self._todos[todo_id] = updated
        return updated.model_copy()

    def discard(self, todo_id: str) -> bool:
        """移除缓存中的 todo，返回是否存在"""
        return self._todos.pop(todo_id, None) is not None
