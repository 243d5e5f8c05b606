"""依赖注入模块 -- 通过 FastAPI Depends 注入服务实例

服务实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Request
from todoassist.core.store import TodoStore

from .services.summary_pipeline import SummaryPipeline
from .services.todo_service import TodoService


def get_todo_store(request: Request) -> TodoStore:
    """从 app.state 获取 TodoStore 实例"""
    return request.app.state.todo_store


def get_todo_service(request: Request) -> TodoService:
    """从 app.state 获取 TodoService 实例"""
    return request.app.state.todo_service


def get_summary_pipeline(request: Request) -> SummaryPipeline:
    """从 app.state 获取 SummaryPipeline 实例"""
    return request.app.state.summary_pipeline
