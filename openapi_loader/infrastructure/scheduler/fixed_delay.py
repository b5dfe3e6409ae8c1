"""固定延迟（fixed-delay）调度器。

APScheduler 的 `IntervalTrigger` 是固定频率语义：下一次触发时间与上一次何时结束无关。
这里改用一次性的 `DateTrigger`，在每次执行结束后再登记下一次执行：

- 首次执行：`start()` 时刻 + `initial_delay`
- 之后每次：上一次执行结束时刻 + `interval`

因此同一个任务的两次执行永远不会重叠。
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FixedDelayScheduler:
    """基于 APScheduler 的固定延迟调度器。"""

    def __init__(
        self,
        job: Callable[[], Awaitable[Any]],
        *,
        initial_delay: timedelta,
        interval: timedelta,
        job_id: str = "fixed-delay-job",
        scheduler: AsyncIOScheduler | None = None,
        clock: Clock = _utc_now,
    ) -> None:
        """初始化调度器。

        Args:
            job: 无参异步任务。
            initial_delay: 首次执行前的等待时间。
            interval: 上一次执行结束到下一次执行开始之间的间隔。
            job_id: APScheduler 中的任务 ID。
            scheduler: 可选；外部提供的 APScheduler 实例（默认新建 `AsyncIOScheduler`）。
            clock: 可选；返回当前 UTC 时间的函数（测试中用于注入假时钟）。
        """

        if initial_delay < timedelta(0):
            raise ValueError("initial_delay 不能为负数")
        if interval <= timedelta(0):
            raise ValueError("interval 必须大于 0")

        self._job = job
        self._initial_delay = initial_delay
        self._interval = interval
        self._job_id = job_id
        self._scheduler = scheduler if scheduler is not None else AsyncIOScheduler(timezone=timezone.utc)
        self._clock = clock
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def job_id(self) -> str:
        return self._job_id

    def start(self) -> None:
        """启动调度并登记首次执行。需在事件循环内调用。"""

        if self._running:
            return
        self._running = True

        if not self._scheduler.running:
            self._scheduler.start()

        run_date = self._schedule_next(self._initial_delay)
        log.info(
            f"定时任务 '{self._job_id}' 已启动，首次执行时间: {run_date.isoformat()}，"
            f"之后每次执行结束后间隔 {self._interval} 再执行。"
        )

    def shutdown(self) -> None:
        """停止调度；正在执行的任务不会被中断，但不会再登记下一次执行。"""

        if not self._running:
            return
        self._running = False

        if self._scheduler.get_job(self._job_id) is not None:
            self._scheduler.remove_job(self._job_id)
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        log.info(f"定时任务 '{self._job_id}' 已停止。")

    def _schedule_next(self, delay: timedelta) -> datetime:
        run_date = self._clock() + delay
        self._scheduler.add_job(
            self._run_once,
            trigger=DateTrigger(run_date=run_date),
            id=self._job_id,
            replace_existing=True,
            misfire_grace_time=None,
            # 下一次登记发生在本次执行的 finally 中，此时执行器仍把本次计为运行中
            max_instances=2,
        )
        return run_date

    async def _run_once(self) -> None:
        try:
            await self._job()
        finally:
            if self._running:
                run_date = self._schedule_next(self._interval)
                log.debug(f"定时任务 '{self._job_id}' 下一次执行时间: {run_date.isoformat()}")
