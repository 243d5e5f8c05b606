"""TodoStore 内存实现

进程内有序字典，适合本地开发与测试。进程退出后数据丢失。
"""

from typing import Any

from ..models.todo import Todo


class InMemoryTodoStore:
    """TodoStore 的内存实现 -- 按插入顺序倒序返回（最新在前）"""

    backend_name = "memory"

    def __init__(self, todos: list[Todo] | None = None) -> None:
        self._todos: dict[str, Todo] = {}
        for todo in reversed(todos or []):
            self._todos[todo.id] = todo

    async def list_todos(self) -> list[Todo]:
        return [t.model_copy() for t in reversed(self._todos.values())]

    async def get_todo(self, todo_id: str) -> Todo | None:
        todo = self._todos.get(todo_id)
        return todo.model_copy() if todo else None

    async def create_todo(self, todo: Todo) -> Todo:
        self._todos[todo.id] = todo.model_copy()
        return todo

    async def update_todo(self, todo_id: str, changes: dict[str, Any]) -> Todo | None:
        current = self._todos.get(todo_id)
        if current is None:
            return None
        updated = Todo.model_validate({**current.model_dump(), **changes})
        self._todos[todo_id] = updated
        return updated.model_copy()

    async def delete_todo(self, todo_id: str) -> bool:
        return self._todos.pop(todo_id, None) is not None

    async def ping(self) -> None:
        return None

    async def close(self) -> None:
        self._todos.clear()
