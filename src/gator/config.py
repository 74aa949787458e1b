"""应用配置管理."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置（环境变量）."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 数据库配置
    database_url: str = "sqlite+aiosqlite:///./gator.db"

    # 抓取配置
    fetch_interval: str = "1m"  # 格式: 1000ms / 30s / 5m / 2h
    user_agent: str = "gator"
    fetch_timeout_seconds: float | None = None  # None 表示不限时
    fetch_mark_policy: Literal["optimistic", "after_success"] = "optimistic"
    allow_overlapping_ticks: bool = True

    # 应用配置
    scheduler_enabled: bool = True
    browse_default_limit: int = 2


@lru_cache
def get_settings() -> Settings:
    """获取应用配置（带缓存）."""
    return Settings()
