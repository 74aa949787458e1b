"""定时抓取调度器."""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any

from apscheduler.events import EVENT_JOB_MAX_INSTANCES, JobSubmissionEvent
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from gator.utils.duration import format_duration

logger = logging.getLogger(__name__)

TickFunc = Callable[[], Awaitable[Any]]


class FeedPoller:
    """
    按固定周期执行抓取周期.

    启动时立即执行一次，之后每隔 period_ms 执行一次，间隔从上一次的计划时间
    算起，不等待上一次完成。allow_overlap=False 时，上一次尚未完成则跳过本次。

    stop() 只停止调度，不等待正在执行的周期，正在执行的周期会在下一个
    await 处被取消。
    """

    JOB_ID = "scrape_feeds"

    def __init__(
        self,
        tick: TickFunc,
        period_ms: int,
        *,
        allow_overlap: bool = True,
    ) -> None:
        if period_ms <= 0:
            msg = f"抓取间隔必须大于 0: {period_ms}ms"
            raise ValueError(msg)

        self._tick = tick
        self.period_ms = period_ms
        self.allow_overlap = allow_overlap
        self._scheduler: AsyncIOScheduler | None = None
        self._stopped = asyncio.Event()
        self.ticks_started = 0
        self.ticks_skipped = 0

    @property
    def is_running(self) -> bool:
        return self._scheduler is not None

    async def _run_tick(self) -> None:
        """执行一次周期，任何异常只记录日志，不影响后续调度."""
        self.ticks_started += 1
        try:
            await self._tick()
        except Exception as e:
            logger.exception(f"抓取周期执行失败: {e}")

    def _on_max_instances(self, event: JobSubmissionEvent) -> None:
        self.ticks_skipped += 1
        logger.info("上一个抓取周期尚未完成，跳过本次调度")

    def start(self) -> None:
        """启动调度器（需要在事件循环中调用）."""
        if self._scheduler is not None:
            msg = "调度器已在运行"
            raise RuntimeError(msg)

        self._stopped.clear()
        scheduler = AsyncIOScheduler()
        scheduler.add_listener(self._on_max_instances, EVENT_JOB_MAX_INSTANCES)
        scheduler.add_job(
            self._run_tick,
            "interval",
            seconds=self.period_ms / 1000,
            next_run_time=datetime.now(UTC),  # 启动时立即执行一次
            id=self.JOB_ID,
            name="抓取下一个 Feed",
            max_instances=sys.maxsize if self.allow_overlap else 1,
            coalesce=True,
            misfire_grace_time=None,
            replace_existing=True,
        )
        scheduler.start()
        self._scheduler = scheduler

        logger.info(f"定时抓取已启动，每 {format_duration(self.period_ms)} 抓取一次")

    def stop(self) -> None:
        """停止调度，可重复调用."""
        if self._scheduler is None:
            return

        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        self._stopped.set()
        logger.info("定时抓取已停止")

    async def wait_stopped(self) -> None:
        """等待 stop() 被调用."""
        await self._stopped.wait()
