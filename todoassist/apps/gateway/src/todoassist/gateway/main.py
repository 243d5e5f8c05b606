"""FastAPI 应用主文件

app 创建 + lifespan 管理：TodoStore 初始化/关闭、缓存预热、
Summarizer / Notifier 组件初始化、路由注册。
"""

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from todoassist.core.config import StoreConfig, load_store_config
from todoassist.core.store import StoreError, TodoCache, create_todo_store
from todoassist.provider import (
    LiteLLMClient,
    NotifierConfig,
    ProviderConfig,
    SlackWebhookNotifier,
    load_notifier_config,
    load_provider_config,
)

from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import health, summarize, todos
from .services.summary_pipeline import SummaryPipeline
from .services.todo_service import TodoService

log = structlog.get_logger()

# 本地前端开发服务器端口
DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:5174",
    "http://localhost:5175",
    "http://localhost:5176",
    "http://localhost:3000",
]


def get_cors_origins() -> list[str]:
    """TODOASSIST_CORS_ORIGINS 为逗号分隔列表，未设置时使用本地开发端口"""
    val = os.environ.get("TODOASSIST_CORS_ORIGINS", "")
    origins = [o.strip() for o in val.split(",") if o.strip()]
    return origins or DEFAULT_CORS_ORIGINS


def log_startup_diagnostics(
    store_config: StoreConfig,
    provider_config: ProviderConfig,
    notifier_config: NotifierConfig,
) -> None:
    """记录各项密钥是否已配置（不输出密钥内容）"""
    secrets_status = {
        "openrouter_api_key": bool(provider_config.api_key.get_secret_value()),
        "slack_webhook_url": notifier_config.is_configured,
    }
    if store_config.backend == "supabase":
        secrets_status["supabase_url"] = bool(store_config.supabase_url)
        secrets_status["supabase_key"] = bool(store_config.supabase_key.get_secret_value())

    log.info("startup_secrets_status", **secrets_status)

    missing = sorted(name for name, is_set in secrets_status.items() if not is_set)
    if missing:
        log.warning("startup_secrets_missing", missing=missing)

    if notifier_config.is_configured and not notifier_config.looks_like_slack:
        log.warning(
            "slack_webhook_url_unexpected_format",
            message="SLACK_WEBHOOK_URL 不以 https://hooks.slack.com/ 开头",
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 Store 与外部服务客户端，关闭时释放连接"""
    store_config = load_store_config()
    provider_config = load_provider_config()
    notifier_config = load_notifier_config()
    log_startup_diagnostics(store_config, provider_config, notifier_config)

    todo_store = await create_todo_store(store_config)
    app.state.todo_store = todo_store

    # 预热缓存：Store 不可达时以空缓存启动
    todo_cache = TodoCache()
    try:
        todo_cache.replace(await todo_store.list_todos())
        log.info("todo_cache_primed", count=len(todo_cache))
    except StoreError as e:
        log.warning("todo_cache_prime_failed", error=str(e))
    app.state.todo_cache = todo_cache

    if provider_config.llm_mode == "litellm":
        llm_client = LiteLLMClient(
            model=provider_config.model,
            api_base=provider_config.api_base,
            api_key=provider_config.api_key.get_secret_value(),
            timeout_s=provider_config.timeout_s,
            app_url=provider_config.app_url,
        )
        log.info(
            "llm_client_initialized",
            mode="litellm",
            model=provider_config.model,
            api_base=provider_config.api_base,
            timeout_s=provider_config.timeout_s,
        )
    else:
        # local 模式：始终使用本地摘要
        llm_client = None
        log.info("llm_client_initialized", mode="local")
    app.state.llm_client = llm_client

    notifier = SlackWebhookNotifier(
        webhook_url=notifier_config.webhook_url.get_secret_value(),
        timeout_s=notifier_config.timeout_s,
    )
    app.state.notifier = notifier

    app.state.todo_service = TodoService(todo_store, todo_cache)
    app.state.summary_pipeline = SummaryPipeline(
        store=todo_store,
        cache=todo_cache,
        summarizer=llm_client,
        notifier=notifier,
    )

    yield

    await todo_store.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="Todo Summary Assistant",
        version="0.1.0",
        description="Todo 管理与 LLM 摘要投递 API",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging，Logging 位于最外层）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    setup_logging()
    setup_logfire(app)

    app.include_router(todos.router, tags=["todos"])
    app.include_router(summarize.router, tags=["summarize"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
