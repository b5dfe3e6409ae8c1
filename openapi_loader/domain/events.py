"""应用生命周期事件。

`ApplicationReadyEvent` 表示“宿主进程已完全就绪（HTTP 服务已开始接受连接）”，
由启动流程显式触发，监听者也需显式订阅。事件在进程内只会生效一次。
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

log = logging.getLogger(__name__)

ReadyListener = Callable[[], Awaitable[None]]


class ApplicationReadyEvent:
    """一次性的应用就绪事件。"""

    def __init__(self) -> None:
        self._listeners: list[ReadyListener] = []
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def subscribe(self, listener: ReadyListener) -> None:
        """订阅就绪事件。

        Args:
            listener: 无参异步回调。事件已触发后再订阅不会被补发。
        """

        self._listeners.append(listener)

    async def fire(self) -> bool:
        """触发就绪事件。

        Returns:
            首次触发返回 True；之后的重复触发直接忽略并返回 False。
        """

        if self._fired:
            log.debug("应用就绪事件已触发过，忽略重复触发。")
            return False
        self._fired = True

        log.info(f"应用已就绪，通知 {len(self._listeners)} 个监听者。")
        for listener in list(self._listeners):
            try:
                await listener()
            except Exception as exc:
                # 单个监听者失败不影响其他监听者；事件不会因此被重新触发
                log.error(f"应用就绪事件监听者 {listener!r} 执行失败: {exc}", exc_info=True)
        return True
