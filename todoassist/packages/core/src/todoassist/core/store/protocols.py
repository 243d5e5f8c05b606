"""Store Protocol 接口定义

TodoStore 是流水线与 CRUD 服务唯一依赖的存储能力接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
具体后端在进程启动时由配置选择。
"""

from typing import Any, Protocol

from ..models.todo import Todo


class TodoStore(Protocol):
    """Todo 存储接口

    所有方法在后端故障时抛出 StoreUnavailableError。
    """

    backend_name: str

    async def list_todos(self) -> list[Todo]:
        """查询全部 todo，按 created_at 倒序"""
        ...

    async def get_todo(self, todo_id: str) -> Todo | None:
        """根据 id 查询 todo"""
        ...

    async def create_todo(self, todo: Todo) -> Todo:
        """插入 todo，返回后端实际保存的记录"""
        ...

    async def update_todo(self, todo_id: str, changes: dict[str, Any]) -> Todo | None:
        """更新字段子集，id 不存在时返回 None"""
        ...

    async def delete_todo(self, todo_id: str) -> bool:
        """删除 todo，id 不存在时返回 False"""
        ...

    async def ping(self) -> None:
        """连通性检查，失败时抛出 StoreUnavailableError"""
        ...

    async def close(self) -> None:
        """释放连接等资源"""
        ...
