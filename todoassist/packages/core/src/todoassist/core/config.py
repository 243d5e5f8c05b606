"""配置模块 -- 可通过环境变量覆盖

包含数据目录、SQLite 路径、Task Store 后端选择与 Supabase 连接参数。
所有密钥仅从环境变量加载，不提供字面量默认值。
"""

import os
from pathlib import Path
from typing import Literal

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()

StoreBackend = Literal["sqlite", "supabase", "memory"]


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TODOASSIST_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TODOASSIST_DB_PATH",
        str(_get_base_dir() / "sqlite" / "todoassist.db"),
    )


# 标题最大长度（超出部分截断）
TITLE_MAX_LENGTH: int = 500


class StoreConfig(BaseModel):
    """Task Store 配置 -- 从环境变量加载

    环境变量:
        TODOASSIST_STORE_BACKEND: 后端类型（sqlite/supabase/memory）
        TODOASSIST_DB_PATH: SQLite 数据库路径
        SUPABASE_URL: Supabase 项目地址
        SUPABASE_KEY: Supabase API key
        TODOASSIST_STORE_TIMEOUT_S: 远程后端请求超时（秒）
    """

    backend: StoreBackend = Field(default="sqlite", description="Task Store 后端")
    db_path: str = Field(default_factory=get_db_path, description="SQLite 数据库路径")
    supabase_url: str = Field(default="", description="Supabase 项目 URL")
    supabase_key: SecretStr = Field(
        default=SecretStr(""),
        description="Supabase API key",
    )
    timeout_s: int = Field(default=10, ge=1, description="远程后端请求超时（秒）")


def load_store_config() -> StoreConfig:
    """从环境变量加载 Store 配置

    Returns:
        StoreConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TODOASSIST_STORE_BACKEND"):
        kwargs["backend"] = val.strip().lower()

    if val := os.environ.get("SUPABASE_URL"):
        kwargs["supabase_url"] = val

    if val := os.environ.get("SUPABASE_KEY"):
        kwargs["supabase_key"] = SecretStr(val)

    if val := os.environ.get("TODOASSIST_STORE_TIMEOUT_S"):
        try:
            kwargs["timeout_s"] = int(val)
        except ValueError:
            log.warning(
                "invalid_timeout_config",
                env_var="TODOASSIST_STORE_TIMEOUT_S",
                value=val,
                fallback=10,
            )

    return StoreConfig(**kwargs)
