"""CLI 入口模块 -- python -m todoassist.core <command>

支持的命令：
  check-store  按当前配置连接 Task Store 并输出 todo 统计
"""

import asyncio
import sys

from .config import load_store_config
from .store import StoreError, create_todo_store


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m todoassist.core <command>")
        print("命令:")
        print("  check-store  连接 Task Store 并输出 todo 统计")
        sys.exit(1)

    command = sys.argv[1]

    if command == "check-store":
        ok = asyncio.run(check_store())
        if not ok:
            sys.exit(2)
    else:
        print(f"未知命令: {command}")
        print("可用命令: check-store")
        sys.exit(1)


async def check_store() -> bool:
    """验证 Store 连通性并输出统计，返回是否成功"""
    config = load_store_config()
    print(f"Store 后端: {config.backend}")
    if config.backend == "sqlite":
        print(f"数据库路径: {config.db_path}")

    try:
        store = await create_todo_store(config)
    except (ValueError, StoreError) as e:
        print(f"Store 初始化失败: {e}")
        return False

    try:
        await store.ping()
        todos = await store.list_todos()
    except StoreError as e:
        print(f"Store 不可用: {e}")
        return False
    finally:
        await store.close()

    pending = sum(1 for t in todos if t.is_pending)
    print(f"连接成功，共 {len(todos)} 条 todo，其中 {pending} 条待办")
    return True


if __name__ == "__main__":
    main()
