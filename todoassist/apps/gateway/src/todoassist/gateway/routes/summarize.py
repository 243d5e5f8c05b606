"""摘要路由

POST /summarize: 触发一次摘要流水线运行。
依赖服务（Store/Summarizer/Notifier）的故障已在流水线内转换为结果数据，
只有不可恢复的故障返回 500。
"""

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from starlette.responses import JSONResponse
from todoassist.core.models import SummaryOutcome

from ..deps import get_summary_pipeline
from ..services.summary_pipeline import SummaryPipeline

log = structlog.get_logger()

router = APIRouter()


class SummarizeResponse(BaseModel):
    """摘要响应 -- 字段名与前端约定一致（deliveryError 为驼峰）"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    summary: str | None = None
    delivered: bool | None = None
    delivery_error: str | None = Field(default=None, alias="deliveryError")


@router.post("/summarize")
async def summarize(pipeline: SummaryPipeline = Depends(get_summary_pipeline)):
    try:
        result = await pipeline.run_summary()
    except Exception as e:
        log.error("summary_failed", error=str(e), error_type=type(e).__name__)
        return JSONResponse(
            status_code=500,
            content={"error": f"Failed to generate summary: {e}"},
        )

    if result.outcome == SummaryOutcome.NOTHING_TO_SUMMARIZE:
        response = SummarizeResponse(success=True, message=result.message)
    else:
        response = SummarizeResponse(
            success=result.success,
            message=result.message,
            summary=result.summary,
            delivered=result.delivered,
            delivery_error=result.delivery_error,
        )
    return response.model_dump(by_alias=True, exclude_none=True)
