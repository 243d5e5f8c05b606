"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，包含 TodoStore 连通性与 Notifier 配置状态。
         profile=llm/full 时额外探测 Summarizer API。
"""

from typing import Literal

import structlog
from fastapi import APIRouter, Depends, Query, Request
from starlette.responses import JSONResponse
from todoassist.core.store import TodoStore

from ..deps import get_todo_store

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(
    request: Request,
    profile: Literal["core", "llm", "full"] | None = Query(
        default=None,
        description="检查配置文件：core（默认）仅核心检查；llm/full 包含 Summarizer API 探测",
    ),
    store: TodoStore = Depends(get_todo_store),
):
    """Readiness 检查 -- 验证核心依赖可用性

    检查项：
    1. store: TodoStore 连通性（失败时 503）
    2. summarizer: 根据 profile 决定是否探测 LLM API
    3. notifier: webhook 是否已配置（仅报告，不影响状态码）
    """
    effective_profile = profile or "core"

    checks: dict[str, str] = {}
    all_ok = True

    # 1. Store 连通性检查
    try:
        await store.ping()
        checks["store"] = "ok"
    except Exception as e:
        checks["store"] = f"error: {e}"
        all_ok = False
    checks["store_backend"] = store.backend_name

    # 2. Summarizer 探测
    if effective_profile in ("llm", "full"):
        llm_client = getattr(request.app.state, "llm_client", None)
        if llm_client is not None:
            try:
                healthy = await llm_client.health_check()
            except Exception as e:
                log.warning("health_check_error", error=str(e))
                healthy = False
            checks["summarizer"] = "ok" if healthy else "unreachable"
            all_ok = all_ok and healthy
        else:
            # local 模式：无 LLM 客户端，跳过探测
            checks["summarizer"] = "skipped"
    else:
        checks["summarizer"] = "skipped"

    # 3. Notifier 配置状态
    notifier = request.app.state.notifier
    checks["notifier"] = "configured" if notifier.is_configured else "missing"

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "profile": effective_profile,
            "checks": checks,
        },
    )
