"""TraceMiddleware -- 为单条 todo 操作绑定 todo_id

从 /todos/{todo_id} 路径提取 todo_id，贯穿该请求的全部日志。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


def extract_todo_id(path: str) -> str | None:
    """从 /todos/{todo_id} 提取 todo_id，其他路径返回 None"""
    parts = [p for p in path.split("/") if p]
    if len(parts) == 2 and parts[0] == "todos":
        return parts[1]
    return None


class TraceMiddleware(BaseHTTPMiddleware):
    """todo 级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if todo_id := extract_todo_id(request.url.path):
            structlog.contextvars.bind_contextvars(todo_id=todo_id)

        return await call_next(request)
