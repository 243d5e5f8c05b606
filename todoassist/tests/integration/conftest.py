"""集成测试共享 fixture -- 通过真实 lifespan 启动应用（SQLite 后端）"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

_CLEARED_ENV_VARS = [
    "OPENROUTER_API_KEY",
    "SLACK_WEBHOOK_URL",
    "SUPABASE_URL",
    "SUPABASE_KEY",
    "TODOASSIST_CORS_ORIGINS",
]


@pytest_asyncio.fixture
async def integration_app(tmp_path: Path, monkeypatch):
    """集成测试用 FastAPI app：SQLite 后端 + local 摘要模式 + 未配置 webhook"""
    for var in _CLEARED_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("TODOASSIST_STORE_BACKEND", "sqlite")
    monkeypatch.setenv("TODOASSIST_DB_PATH", str(tmp_path / "sqlite" / "todo.db"))
    monkeypatch.setenv("TODOASSIST_LLM_MODE", "local")
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from todoassist.gateway.main import create_app

    app = create_app()
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
