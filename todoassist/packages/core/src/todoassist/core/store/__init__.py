"""Todo Assistant Core Store -- TodoStore 后端与缓存

提供工厂函数按配置创建唯一的 TodoStore 实例。
"""

from pathlib import Path

import aiosqlite
import structlog

from ..config import StoreConfig
from .cache import TodoCache
from .exceptions import StoreError, StoreUnavailableError
from .memory_store import InMemoryTodoStore
from .protocols import TodoStore
from .sqlite_init import init_db
from .sqlite_store import SqliteTodoStore
from .supabase_store import SupabaseTodoStore

log = structlog.get_logger()


async def create_todo_store(config: StoreConfig) -> TodoStore:
    """根据配置创建 TodoStore

    Args:
        config: Store 配置

    Returns:
        TodoStore 实例

    Raises:
        ValueError: supabase 后端缺少 SUPABASE_URL 或 SUPABASE_KEY
        StoreUnavailableError: SQLite 数据库无法打开或初始化
    """
    if config.backend == "memory":
        store: TodoStore = InMemoryTodoStore()
    elif config.backend == "supabase":
        supabase_key = config.supabase_key.get_secret_value()
        if not config.supabase_url or not supabase_key:
            raise ValueError("supabase backend requires SUPABASE_URL and SUPABASE_KEY")
        if not config.supabase_url.startswith("https://"):
            log.warning("supabase_url_not_https", supabase_url=config.supabase_url)
        store = SupabaseTodoStore(
            base_url=config.supabase_url,
            api_key=supabase_key,
            timeout_s=config.timeout_s,
        )
    else:
        try:
            # 确保数据库目录存在
            Path(config.db_path).parent.mkdir(parents=True, exist_ok=True)
            conn = await aiosqlite.connect(config.db_path)
            await init_db(conn)
        except (OSError, aiosqlite.Error) as e:
            raise StoreUnavailableError("sqlite", e) from e
        store = SqliteTodoStore(conn)

    log.info("todo_store_created", backend=store.backend_name)
    return store


__all__ = [
    "TodoStore",
    "TodoCache",
    "create_todo_store",
    "InMemoryTodoStore",
    "SqliteTodoStore",
    "SupabaseTodoStore",
    "StoreError",
    "StoreUnavailableError",
    "init_db",
]
