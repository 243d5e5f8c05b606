"""TodoStore Supabase 实现

通过 Supabase 的 PostgREST 接口（{SUPABASE_URL}/rest/v1/todos）读写，
使用 httpx 异步客户端。连接失败、超时、非 2xx 响应与无法解析的响应体
统一包装为 StoreUnavailableError。
"""

from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from ..models.todo import Todo
from .exceptions import StoreUnavailableError

log = structlog.get_logger()

# 要求 PostgREST 在写操作后返回受影响的行
_RETURN_REPRESENTATION = {"Prefer": "return=representation"}


class SupabaseTodoStore:
    """TodoStore 的 Supabase（PostgREST）实现"""

    backend_name = "supabase"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_s: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """初始化 Supabase 客户端

        Args:
            base_url: Supabase 项目 URL（如 https://xyz.supabase.co）
            api_key: Supabase API key，同时用于 apikey 头与 Bearer 认证
            timeout_s: 单次请求超时（秒）
            transport: 自定义 httpx transport（测试注入 MockTransport）
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=f"{self._base_url}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout_s,
            transport=transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        """发送请求并返回解析后的 JSON 响应体"""
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log.warning(
                "supabase_request_failed",
                method=method,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise StoreUnavailableError(self.backend_name, e) from e

        if resp.status_code >= 400:
            log.warning(
                "supabase_error_response",
                method=method,
                status_code=resp.status_code,
            )
            raise StoreUnavailableError(
                self.backend_name,
                f"HTTP {resp.status_code}: {resp.text[:200]}",
            )

        if not resp.content:
            return []
        try:
            return resp.json()
        except ValueError as e:
            raise StoreUnavailableError(self.backend_name, e) from e

    def _rows_to_todos(self, rows: Any) -> list[Todo]:
        if not isinstance(rows, list):
            raise StoreUnavailableError(
                self.backend_name,
                f"unexpected response body: {type(rows).__name__}",
            )
        try:
            return [Todo.model_validate(row) for row in rows]
        except ValidationError as e:
            raise StoreUnavailableError(self.backend_name, e) from e

    async def list_todos(self) -> list[Todo]:
        rows = await self._request(
            "GET",
            "/todos",
            params={"select": "*", "order": "created_at.desc"},
        )
        return self._rows_to_todos(rows)

    async def get_todo(self, todo_id: str) -> Todo | None:
        rows = await self._request(
            "GET",
            "/todos",
            params={"select": "*", "id": f"eq.{todo_id}"},
        )
        todos = self._rows_to_todos(rows)
        return todos[0] if todos else None

    async def create_todo(self, todo: Todo) -> Todo:
        rows = await self._request(
            "POST",
            "/todos",
            json=[todo.model_dump(mode="json")],
            headers=_RETURN_REPRESENTATION,
        )
        todos = self._rows_to_todos(rows)
        return todos[0] if todos else todo

    async def update_todo(self, todo_id: str, changes: dict[str, Any]) -> Todo | None:
        if not changes:
            return await self.get_todo(todo_id)
        rows = await self._request(
            "PATCH",
            "/todos",
            params={"id": f"eq.{todo_id}"},
            json=changes,
            headers=_RETURN_REPRESENTATION,
        )
        todos = self._rows_to_todos(rows)
        return todos[0] if todos else None

    async def delete_todo(self, todo_id: str) -> bool:
        rows = await self._request(
            "DELETE",
            "/todos",
            params={"id": f"eq.{todo_id}"},
            headers=_RETURN_REPRESENTATION,
        )
        return bool(self._rows_to_todos(rows))

    async def ping(self) -> None:
        await self._request("GET", "/todos", params={"select": "id", "limit": "1"})

    async def close(self) -> None:
        await self._client.aclose()
