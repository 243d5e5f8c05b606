"""SQLite 数据库初始化

PRAGMA 配置 + todos 表 DDL + 索引创建。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# todos 表 DDL
_TODOS_DDL = """
CREATE TABLE IF NOT EXISTS todos (
    id          TEXT PRIMARY KEY,
    title       TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    completed   INTEGER NOT NULL DEFAULT 0,
    created_at  TEXT NOT NULL
);
"""

_TODOS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_todos_created_at ON todos(created_at DESC);",
    "CREATE INDEX IF NOT EXISTS idx_todos_completed ON todos(completed);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    await conn.execute(_TODOS_DDL)
    for idx_sql in _TODOS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效

    Returns:
        True 如果 WAL 模式已启用
    """
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
