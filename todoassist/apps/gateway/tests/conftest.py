"""apps/gateway 测试配置 -- 内存 Store + Mock 外部服务 + httpx AsyncClient

app.state 手动装配（ASGITransport 不触发 lifespan）。
"""

import os
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from todoassist.core.store import InMemoryTodoStore, TodoCache
from todoassist.gateway.services.summary_pipeline import SummaryPipeline
from todoassist.gateway.services.todo_service import TodoService
from todoassist.provider import ModelCallResult, SlackWebhookNotifier

WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"


@pytest.fixture
def todo_store(sample_todos) -> InMemoryTodoStore:
    return InMemoryTodoStore(sample_todos)


@pytest.fixture
def todo_cache() -> TodoCache:
    return TodoCache()


@pytest.fixture
def ai_summary() -> str:
    return "You have two open items: buy milk and ship the v2.1 release."


@pytest.fixture
def mock_summarizer(ai_summary) -> AsyncMock:
    """Summarizer 替身，默认返回固定摘要"""
    summarizer = AsyncMock()
    summarizer.complete.return_value = ModelCallResult(
        content=ai_summary,
        model_name="deepseek-chat",
        provider="openrouter",
    )
    summarizer.health_check.return_value = True
    return summarizer


@pytest.fixture
def webhook_requests() -> list[httpx.Request]:
    """MockTransport 收到的 webhook 请求"""
    return []


@pytest.fixture
def webhook_status() -> int:
    return 200


@pytest.fixture
def notifier(webhook_requests, webhook_status) -> SlackWebhookNotifier:
    def handler(request: httpx.Request) -> httpx.Response:
        webhook_requests.append(request)
        return httpx.Response(webhook_status, text="ok" if webhook_status == 200 else "invalid_token")

    return SlackWebhookNotifier(WEBHOOK_URL, transport=httpx.MockTransport(handler))


@pytest_asyncio.fixture
async def app(todo_store, todo_cache, mock_summarizer, notifier):
    """创建测试用 FastAPI app 实例"""
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from todoassist.gateway.main import create_app

    application = create_app()
    application.state.todo_store = todo_store
    application.state.todo_cache = todo_cache
    application.state.llm_client = mock_summarizer
    application.state.notifier = notifier
    application.state.todo_service = TodoService(todo_store, todo_cache)
    application.state.summary_pipeline = SummaryPipeline(
        store=todo_store,
        cache=todo_cache,
        summarizer=mock_summarizer,
        notifier=notifier,
    )
    yield application

    os.environ.pop("LOGFIRE_SEND_TO_LOGFIRE", None)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
