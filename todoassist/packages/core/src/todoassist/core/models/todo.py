"""Todo Domain Model

规范表示：字符串 id + 必填 title。
历史字段 text 作为 title 的废弃别名，仅在输入侧接受（请求体与存量数据行），输出从不包含。
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ..config import TITLE_MAX_LENGTH


# 缺少 created_at 的存量数据行使用固定时间，保证多次读取结果一致
LEGACY_CREATED_AT = datetime(1970, 1, 1, tzinfo=UTC)


def _normalize_legacy_row(data: Any) -> Any:
    """兼容存量数据行：text -> title，数字 id -> 字符串，null 字段 -> 默认值"""
    if not isinstance(data, dict):
        return data

    data = dict(data)
    legacy_text = data.pop("text", None)
    if not (data.get("title") or "").strip() and legacy_text:
        data["title"] = legacy_text

    if isinstance(data.get("id"), int):
        data["id"] = str(data["id"])

    # 缺失或为 null 的完成标记视为待办
    if data.get("completed") is None:
        data["completed"] = False
    if data.get("description") is None:
        data["description"] = ""
    if data.get("created_at") is None:
        data["created_at"] = LEGACY_CREATED_AT
    return data


class Todo(BaseModel):
    """Todo 数据模型

    id 在 store 内唯一且生命周期内不变；created_at 创建时写入，之后不再修改。
    """

    id: str = Field(description="唯一标识，ULID 格式（存量数据可能为数字字符串）")
    title: str = Field(description="标题，去除首尾空白后非空")
    description: str = Field(default="", description="描述，可为空")
    completed: bool = Field(default=False, description="完成标记")
    created_at: datetime = Field(description="创建时间")

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_fields(cls, data: Any) -> Any:
        return _normalize_legacy_row(data)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value[:TITLE_MAX_LENGTH]

    @property
    def is_pending(self) -> bool:
        return not self.completed


class TodoCreate(BaseModel):
    """创建请求体 -- title 与废弃别名 text 二选一"""

    title: str | None = Field(default=None, description="标题")
    text: str | None = Field(default=None, description="废弃别名，等同 title")
    description: str | None = Field(default=None, description="描述")

    @property
    def uses_legacy_text(self) -> bool:
        return not (self.title or "").strip() and bool((self.text or "").strip())

    def resolved_title(self) -> str:
        """返回去除空白后的标题（非空 title 优先，其次 text）"""
        title = (self.title or "").strip() or (self.text or "").strip()
        return title[:TITLE_MAX_LENGTH]


class TodoUpdate(BaseModel):
    """更新请求体 -- 任意字段子集"""

    title: str | None = Field(default=None, description="标题")
    text: str | None = Field(default=None, description="废弃别名，等同 title")
    description: str | None = Field(default=None, description="描述")
    completed: bool | None = Field(default=None, description="完成标记")

    @property
    def uses_legacy_text(self) -> bool:
        return not (self.title or "").strip() and bool((self.text or "").strip())

    def changes(self) -> dict[str, Any]:
        """返回本次请求实际提供的字段

        title 经过 strip，可能为空字符串，由调用方负责校验。
        """
        changes: dict[str, Any] = {}
        if self.title is not None or self.text is not None:
            title = (self.title or "").strip() or (self.text or "").strip()
            changes["title"] = title[:TITLE_MAX_LENGTH]
        if self.description is not None:
            changes["description"] = self.description.strip()
        if self.completed is not None:
            changes["completed"] = self.completed
        return changes
