"""TodoStore SQLite 实现

关系型数据库后端（默认）。aiosqlite 错误统一包装为 StoreUnavailableError。
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

import aiosqlite
import structlog
from pydantic import ValidationError

from ..models.todo import Todo
from .exceptions import StoreUnavailableError

log = structlog.get_logger()

_SELECT_COLUMNS = "id, title, description, completed, created_at"

# 允许通过 update_todo 修改的列
_UPDATABLE_COLUMNS = ("title", "description", "completed")


class SqliteTodoStore:
    """TodoStore 的 SQLite 实现"""

    backend_name = "sqlite"

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    @asynccontextmanager
    async def _translate_errors(self, rollback: bool = False) -> AsyncIterator[None]:
        """将 aiosqlite 异常转换为 StoreUnavailableError"""
        try:
            yield
        except aiosqlite.Error as e:
            if rollback:
                await self._safe_rollback()
            raise StoreUnavailableError(self.backend_name, e) from e

    async def _safe_rollback(self) -> None:
        try:
            await self._conn.rollback()
        except aiosqlite.Error as e:
            log.warning("sqlite_rollback_failed", error=str(e))

    async def list_todos(self) -> list[Todo]:
        """查询全部 todo，按 created_at 倒序"""
        async with self._translate_errors():
            cursor = await self._conn.execute(
                f"SELECT {_SELECT_COLUMNS} FROM todos ORDER BY created_at DESC"
            )
            rows = await cursor.fetchall()
        return self._rows_to_todos(rows)

    async def get_todo(self, todo_id: str) -> Todo | None:
        """根据 id 查询 todo"""
        async with self._translate_errors():
            cursor = await self._conn.execute(
                f"SELECT {_SELECT_COLUMNS} FROM todos WHERE id = ?",
                (todo_id,),
            )
            row = await cursor.fetchone()
        if row is None:
            return None
        return self._rows_to_todos([row])[0]

    async def create_todo(self, todo: Todo) -> Todo:
        """插入 todo 记录"""
        async with self._translate_errors(rollback=True):
            await self._conn.execute(
                """
                INSERT INTO todos (id, title, description, completed, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    todo.id,
                    todo.title,
                    todo.description,
                    int(todo.completed),
                    todo.created_at.isoformat(),
                ),
            )
            await self._conn.commit()
        return todo

    async def update_todo(self, todo_id: str, changes: dict[str, Any]) -> Todo | None:
        """更新字段子集，id 不存在时返回 None"""
        columns = [c for c in _UPDATABLE_COLUMNS if c in changes]
        if not columns:
            return await self.get_todo(todo_id)

        assignments = ", ".join(f"{c} = ?" for c in columns)
        params = [
            int(changes[c]) if c == "completed" else changes[c] for c in columns
        ]

        async with self._translate_errors(rollback=True):
            cursor = await self._conn.execute(
                f"UPDATE todos SET {assignments} WHERE id = ?",
                (*params, todo_id),
            )
            await self._conn.commit()
            if cursor.rowcount == 0:
                return None
        return await self.get_todo(todo_id)

    async def delete_todo(self, todo_id: str) -> bool:
        """删除 todo，id 不存在时返回 False"""
        async with self._translate_errors(rollback=True):
            cursor = await self._conn.execute(
                "DELETE FROM todos WHERE id = ?",
                (todo_id,),
            )
            await self._conn.commit()
        return cursor.rowcount > 0

    async def ping(self) -> None:
        """执行 SELECT 1 验证连接可用"""
        async with self._translate_errors():
            cursor = await self._conn.execute("SELECT 1")
            await cursor.fetchone()

    async def close(self) -> None:
        await self._conn.close()

    def _rows_to_todos(self, rows) -> list[Todo]:
        """将数据库行转换为 Todo 模型，无法解析的行视为后端故障"""
        try:
            return [
                Todo(
                    id=row[0],
                    title=row[1],
                    description=row[2],
                    completed=bool(row[3]),
                    created_at=datetime.fromisoformat(row[4]),
                )
                for row in rows
            ]
        except (ValidationError, ValueError, TypeError) as e:
            log.warning("sqlite_row_decode_failed", error=str(e))
            raise StoreUnavailableError(self.backend_name, e) from e
