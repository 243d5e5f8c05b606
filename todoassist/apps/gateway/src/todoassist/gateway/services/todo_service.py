"""TodoService -- todo 增删改查业务逻辑

所有写操作先写 TodoStore，再同步到 TodoCache。
Store 不可达时降级为仅操作缓存，请求本身不失败。
"""

from datetime import UTC, datetime

import structlog
from todoassist.core.models import Todo, TodoCreate, TodoUpdate
from todoassist.core.store import StoreError, TodoCache, TodoStore
from ulid import ULID

log = structlog.get_logger()


class TitleRequiredError(ValueError):
    """标题为空（或仅空白）"""

    def __init__(self) -> None:
        super().__init__("Title is required")


class TodoService:
    """todo 业务服务"""

    def __init__(self, store: TodoStore, cache: TodoCache) -> None:
        self._store = store
        self._cache = cache

    async def list_todos(self) -> list[Todo]:
        """查询全部 todo（最新在前），store 故障时返回缓存快照"""
        try:
            todos = await self._store.list_todos()
        except StoreError as e:
            log.warning("todo_list_degraded", error=str(e), cached_count=len(self._cache))
            return self._cache.snapshot()
        self._cache.replace(todos)
        return todos

    async def create_todo(self, data: TodoCreate) -> Todo:
        """创建 todo

        Raises:
            TitleRequiredError: 标题为空
        """
        title = data.resolved_title()
        if not title:
            raise TitleRequiredError()
        if data.uses_legacy_text:
            log.warning("deprecated_field_used", field="text", replacement="title")

        todo = Todo(
            id=str(ULID()),
            title=title,
            description=(data.description or "").strip(),
            completed=False,
            created_at=datetime.now(UTC),
        )

        try:
            todo = await self._store.create_todo(todo)
        except StoreError as e:
            log.warning("todo_create_degraded", todo_id=todo.id, error=str(e))
        else:
            log.info("todo_created", todo_id=todo.id)

        self._cache.put(todo)
        return todo

    async def update_todo(self, todo_id: str, data: TodoUpdate) -> Todo | None:
        """更新 todo 的字段子集，id 不存在时返回 None

        Raises:
            TitleRequiredError: 提供了标题但为空
        """
        changes = data.changes()
        if "title" in changes and not changes["title"]:
            raise TitleRequiredError()
        if data.uses_legacy_text:
            log.warning("deprecated_field_used", field="text", replacement="title")

        try:
            updated = await self._store.update_todo(todo_id, changes)
        except StoreError as e:
            log.warning("todo_update_degraded", todo_id=todo_id, error=str(e))
            return self._cache.patch(todo_id, changes)

        if updated is None:
            self._cache.discard(todo_id)
            return None

        self._cache.put(updated)
        log.info("todo_updated", todo_id=todo_id, fields=sorted(changes))
        return updated

    async def delete_todo(self, todo_id: str) -> bool:
        """删除 todo，返回是否存在"""
        try:
            deleted = await self._store.delete_todo(todo_id)
        except StoreError as e:
            log.warning("todo_delete_degraded", todo_id=todo_id, error=str(e))
            return self._cache.discard(todo_id)

        self._cache.discard(todo_id)
        if deleted:
            log.info("todo_deleted", todo_id=todo_id)
        return deleted
