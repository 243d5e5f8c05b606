"""SummaryPipeline -- 待办摘要生成与投递流水线

一次运行依次执行：
1. 从 TodoStore 读取全部 todo（不可达时降级到 TodoCache 快照）
2. 过滤待办；为空时直接返回 NOTHING_TO_SUMMARIZE，不调用下游服务
3. 格式化为 "- <title>" / "- <title>: <description>" 列表（保持 store 顺序）
4. 调用 Summarizer（失败、超时或内容为空时使用本地降级摘要）
5. 调用 Notifier（失败时记录诊断信息，不影响整体成功）
6. 返回 SummaryResult

Summarizer 与 Notifier 每次运行各最多调用一次，不重试。
以上之外的故障视为不可恢复，向调用方抛出。
"""

import time
from typing import Protocol

import structlog
from todoassist.core.models import (
    SnapshotSource,
    SummaryOutcome,
    SummaryResult,
    Todo,
)
from todoassist.core.store import StoreError, TodoCache, TodoStore
from todoassist.provider import ModelCallResult

log = structlog.get_logger()

SYSTEM_PROMPT = (
    "You are a helpful assistant that summarizes todo lists in a concise, "
    "organized, and actionable way. Group related items when possible and "
    "keep the summary brief but complete."
)

NOTHING_TO_SUMMARIZE_MESSAGE = "No pending todos to summarize"
DELIVERED_MESSAGE = "Summary generated and sent to Slack"
DELIVERY_FAILED_MESSAGE = "Summary generated but Slack delivery failed"

FALLBACK_HEADER = "Todo Summary"
FALLBACK_FOOTER = "Focus on completing these tasks to stay productive!"


class SummaryPipelineError(Exception):
    """流水线内部不可恢复的故障"""


class Summarizer(Protocol):
    async def complete(
        self, messages: list[dict[str, str]], **kwargs
    ) -> ModelCallResult: ...


class Notifier(Protocol):
    async def notify(self, text: str, pending_count: int) -> None: ...


def _single_line(value: str) -> str:
    return " ".join(value.split())


def select_pending(todos: list[Todo]) -> list[Todo]:
    """保持原有顺序过滤出待办"""
    return [t for t in todos if t.is_pending]


def format_todo_list(todos: list[Todo]) -> str:
    """每个 todo 一行，有描述时追加 ": <description>" """
    lines = []
    for todo in todos:
        line = f"- {_single_line(todo.title)}"
        description = _single_line(todo.description)
        if description:
            line += f": {description}"
        lines.append(line)
    return "\n".join(lines)


def build_summary_messages(todo_list: str) -> list[dict[str, str]]:
    """构建 system + user 两条消息"""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": f"Please summarize this todo list:\n\n{todo_list}",
        },
    ]


def build_fallback_summary(pending_count: int, todo_list: str) -> str:
    """本地确定性降级摘要：标题行 + 待办数量 + 同一份列表"""
    return (
        f"{FALLBACK_HEADER}\n\n"
        f"You currently have {pending_count} pending task(s):\n\n"
        f"{todo_list}\n\n"
        f"{FALLBACK_FOOTER}"
    )


class SummaryPipeline:
    """摘要流水线

    依赖全部通过构造器注入：store 与 cache 由应用 lifespan 创建，
    summarizer 为 None 时（local 模式）始终使用本地摘要。
    """

    def __init__(
        self,
        store: TodoStore,
        cache: TodoCache,
        summarizer: Summarizer | None,
        notifier: Notifier,
    ) -> None:
        self._store = store
        self._cache = cache
        self._summarizer = summarizer
        self._notifier = notifier

    async def run_summary(self) -> SummaryResult:
        """生成并投递待办摘要

        Returns:
            SummaryResult

        Raises:
            SummaryPipelineError: 不可恢复的内部故障
        """
        start_time = time.monotonic()
        log.info("summary_started")

        todos, source = await self._read_todos()
        pending = select_pending(todos)

        if not pending:
            log.info("summary_nothing_pending", total=len(todos), source=source.value)
            return SummaryResult(
                outcome=SummaryOutcome.NOTHING_TO_SUMMARIZE,
                success=True,
                message=NOTHING_TO_SUMMARIZE_MESSAGE,
                source=source,
            )

        todo_list = format_todo_list(pending)
        generation = await self._generate(todo_list, len(pending))
        if not generation.content.strip():
            raise SummaryPipelineError("generated summary text is empty")

        delivery_error = await self._deliver(generation.content, len(pending))
        delivered = delivery_error is None

        log.info(
            "summary_completed",
            pending_count=len(pending),
            source=source.value,
            is_fallback=generation.is_fallback,
            delivered=delivered,
            duration_ms=int((time.monotonic() - start_time) * 1000),
        )
        return SummaryResult(
            outcome=SummaryOutcome.COMPLETED,
            success=True,
            message=DELIVERED_MESSAGE if delivered else DELIVERY_FAILED_MESSAGE,
            summary=generation.content,
            delivered=delivered,
            delivery_error=delivery_error,
            pending_count=len(pending),
            is_fallback=generation.is_fallback,
            source=source,
        )

    async def _read_todos(self) -> tuple[list[Todo], SnapshotSource]:
        """读取 todo 集合；store 故障时降级到缓存快照"""
        try:
            todos = await self._store.list_todos()
        except StoreError as e:
            snapshot = self._cache.snapshot()
            log.warning(
                "store_read_degraded",
                error=str(e),
                cached_count=len(snapshot),
                cache_refreshed_at=(
                    self._cache.refreshed_at.isoformat()
                    if self._cache.refreshed_at
                    else None
                ),
            )
            return snapshot, SnapshotSource.CACHE

        self._cache.replace(todos)
        return todos, SnapshotSource.STORE

    async def _generate(self, todo_list: str, pending_count: int) -> ModelCallResult:
        """调用 Summarizer；任何失败都替换为本地摘要"""
        if self._summarizer is None:
            return self._local_summary(todo_list, pending_count, "summarizer disabled")

        try:
            result = await self._summarizer.complete(build_summary_messages(todo_list))
        except Exception as e:
            log.warning(
                "summarizer_failed_using_local_summary",
                error=str(e),
                error_type=type(e).__name__,
            )
            return self._local_summary(todo_list, pending_count, str(e))

        if not result.content or not result.content.strip():
            log.warning("summarizer_empty_content_using_local_summary")
            return self._local_summary(todo_list, pending_count, "empty content")
        return result

    @staticmethod
    def _local_summary(todo_list: str, pending_count: int, reason: str) -> ModelCallResult:
        return ModelCallResult(
            content=build_fallback_summary(pending_count, todo_list),
            model_name="local",
            provider="local",
            is_fallback=True,
            fallback_reason=reason,
        )

    async def _deliver(self, text: str, pending_count: int) -> str | None:
        """调用 Notifier，返回失败诊断信息，成功时返回 None"""
        try:
            await self._notifier.notify(text, pending_count)
        except Exception as e:
            reason = str(e) or type(e).__name__
            log.warning(
                "summary_delivery_failed",
                error=reason,
                error_type=type(e).__name__,
            )
            return reason
        return None
