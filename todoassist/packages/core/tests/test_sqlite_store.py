"""SqliteTodoStore 单元测试

测试内容：
1. 建表 + WAL 模式
2. CRUD 与 created_at 倒序
3. 连接故障包装为 StoreUnavailableError
"""

import aiosqlite
import pytest
from todoassist.core.store import SqliteTodoStore, StoreError, StoreUnavailableError
from todoassist.core.store.sqlite_init import verify_wal_mode


class TestInitDb:
    async def test_wal_mode_enabled(self, core_db: aiosqlite.Connection):
        assert await verify_wal_mode(core_db) is True

    async def test_todos_table_created(self, core_db: aiosqlite.Connection):
        cursor = await core_db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='todos'"
        )
        assert await cursor.fetchone() is not None


class TestSqliteTodoStore:
    async def test_create_and_get(self, sqlite_store: SqliteTodoStore, make_todo):
        todo = make_todo("t1", "Buy milk", "2 litres")
        await sqlite_store.create_todo(todo)

        loaded = await sqlite_store.get_todo("t1")
        assert loaded == todo

    async def test_get_unknown_returns_none(self, sqlite_store: SqliteTodoStore):
        assert await sqlite_store.get_todo("missing") is None

    async def test_list_newest_first(self, sqlite_store: SqliteTodoStore, sample_todos):
        # 以乱序插入，读取时按 created_at 倒序
        for todo in reversed(sample_todos):
            await sqlite_store.create_todo(todo)
        await sqlite_store.create_todo(sample_todos[0].model_copy(update={"id": "t0"}))

        todos = await sqlite_store.list_todos()
        assert [t.id for t in todos][-2:] == ["t2", "t3"]
        assert len(todos) == 4

    async def test_update_subset(self, sqlite_store: SqliteTodoStore, make_todo):
        await sqlite_store.create_todo(make_todo("t1", "Buy milk", "2 litres"))

        updated = await sqlite_store.update_todo("t1", {"completed": True})
        assert updated is not None
        assert updated.completed is True
        assert updated.title == "Buy milk"
        assert updated.description == "2 litres"

    async def test_update_unknown_returns_none(self, sqlite_store: SqliteTodoStore):
        assert await sqlite_store.update_todo("missing", {"completed": True}) is None

    async def test_update_ignores_unknown_columns(
        self, sqlite_store: SqliteTodoStore, make_todo
    ):
        todo = await sqlite_store.create_todo(make_todo("t1", "Buy milk"))
        updated = await sqlite_store.update_todo("t1", {"id": "hijack"})
        assert updated == todo

    async def test_delete(self, sqlite_store: SqliteTodoStore, make_todo):
        await sqlite_store.create_todo(make_todo("t1", "Buy milk"))

        assert await sqlite_store.delete_todo("t1") is True
        assert await sqlite_store.delete_todo("t1") is False
        assert await sqlite_store.list_todos() == []

    async def test_duplicate_id_raises_store_error(
        self, sqlite_store: SqliteTodoStore, make_todo
    ):
        await sqlite_store.create_todo(make_todo("t1", "Buy milk"))
        with pytest.raises(StoreError):
            await sqlite_store.create_todo(make_todo("t1", "Again"))

    async def test_ping(self, sqlite_store: SqliteTodoStore):
        await sqlite_store.ping()

    async def test_sql_failure_raises_unavailable(
        self, sqlite_store: SqliteTodoStore, core_db: aiosqlite.Connection
    ):
        await core_db.execute("DROP TABLE todos")
        await core_db.commit()

        with pytest.raises(StoreUnavailableError) as exc_info:
            await sqlite_store.list_todos()
        assert exc_info.value.backend == "sqlite"

    async def test_blank_title_row_raises_unavailable(
        self, sqlite_store: SqliteTodoStore, core_db: aiosqlite.Connection
    ):
        """无法解析的数据行包装为 StoreUnavailableError"""
        await core_db.execute(
            "INSERT INTO todos (id, title, description, completed, created_at) "
            "VALUES ('x', '   ', '', 0, '2026-01-01T00:00:00+00:00')"
        )
        await core_db.commit()

        with pytest.raises(StoreUnavailableError):
            await sqlite_store.list_todos()
        with pytest.raises(StoreUnavailableError):
            await sqlite_store.get_todo("x")

    async def test_bad_timestamp_row_raises_unavailable(
        self, sqlite_store: SqliteTodoStore, core_db: aiosqlite.Connection
    ):
        await core_db.execute(
            "INSERT INTO todos (id, title, description, completed, created_at) "
            "VALUES ('x', 'Buy milk', '', 0, 'not-a-date')"
        )
        await core_db.commit()

        with pytest.raises(StoreUnavailableError) as exc_info:
            await sqlite_store.list_todos()
        assert exc_info.value.backend == "sqlite"
