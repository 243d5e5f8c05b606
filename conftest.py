"""全局 pytest 配置 -- 临时 SQLite 数据库 fixture + 样例 todo"""

from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio
from todoassist.core.models import Todo

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "test.db"


@pytest_asyncio.fixture
async def db_conn(tmp_db_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """提供已初始化的临时 SQLite 数据库连接"""
    from todoassist.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(tmp_db_path))
    await init_db(conn)
    yield conn
    await conn.close()


@pytest.fixture
def make_todo() -> Callable[..., Todo]:
    """构造确定时间戳的 Todo（minutes_ago 越小越新）"""

    def _make(
        todo_id: str,
        title: str,
        description: str = "",
        completed: bool = False,
        minutes_ago: int = 0,
    ) -> Todo:
        return Todo(
            id=todo_id,
            title=title,
            description=description,
            completed=completed,
            created_at=BASE_TIME - timedelta(minutes=minutes_ago),
        )

    return _make


@pytest.fixture
def sample_todos(make_todo) -> list[Todo]:
    """最新在前的三条 todo，其中一条已完成"""
    return [
        make_todo("t1", "Buy milk", minutes_ago=0),
        make_todo("t2", "Ship release", "v2.1 to prod", minutes_ago=1),
        make_todo("t3", "Done task", completed=True, minutes_ago=2),
    ]
