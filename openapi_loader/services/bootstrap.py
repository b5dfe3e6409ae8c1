"""加载器的显式装配：启动钩子 + 定时任务。

- 启动钩子：订阅 `ApplicationReadyEvent`，进程内只会触发一次加载。
- 定时任务：登记到 `FixedDelayScheduler`，按固定延迟重复加载。

两者都直接持有同一个加载器实例。
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress

from ..domain.events import ApplicationReadyEvent
from ..domain.interfaces import DocumentLoader
from ..infrastructure.scheduler.fixed_delay import FixedDelayScheduler

log = logging.getLogger(__name__)


class LoaderBootstrap:
    """负责把加载器挂到启动事件与调度器上，并在关闭时清理。"""

    def __init__(
        self,
        *,
        loader: DocumentLoader,
        ready_event: ApplicationReadyEvent,
        scheduler: FixedDelayScheduler | None = None,
    ) -> None:
        self._loader = loader
        self._ready_event = ready_event
        self._scheduler = scheduler
        self._startup_task: asyncio.Task[bool] | None = None
        self._started = False
        self._subscribed = False

    @property
    def startup_task(self) -> asyncio.Task[bool] | None:
        """启动加载的后台任务（就绪事件触发前为 None）。"""
        return self._startup_task

    def start(self) -> None:
        """注册启动钩子并启动定时任务。重复调用无副作用；stop() 之后可再次启动。"""

        if self._started:
            return
        self._started = True

        # 启动钩子在进程内只订阅一次，就绪事件本身也只会生效一次
        if not self._subscribed:
            self._ready_event.subscribe(self._on_application_ready)
            self._subscribed = True

        if self._scheduler is not None:
            self._scheduler.start()
        else:
            log.info("定时刷新已禁用，仅在启动时加载一次 OpenAPI 文档。")

    async def stop(self) -> None:
        """停止定时任务，并取消尚未完成的启动加载。"""

        self._started = False
        if self._scheduler is not None:
            self._scheduler.shutdown()

        task = self._startup_task
        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    async def _on_application_ready(self) -> None:
        # 默认地址指向宿主服务自身，不能阻塞就绪流程，放到后台执行
        if self._startup_task is not None:
            return
        self._startup_task = asyncio.create_task(
            self._loader.load(), name="openapi-startup-load"
        )
