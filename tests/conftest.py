"""测试运行期插件配置。"""

from __future__ import annotations

import logging

import pytest


@pytest.hookimpl(wrapper=True, trylast=True)
def pytest_runtest_call(item: pytest.Item):
    """pytest 的日志插件会在调用阶段向根 logger 挂载 LogCaptureHandler，
    使 ``bare_root_logger`` 在 setup 阶段清空的 handler 列表失效；
    这里在最内层把根 logger 的 handler 列表再次置空，调用结束后恢复。"""

    if "bare_root_logger" not in getattr(item, "fixturenames", ()):
        return (yield)

    root = logging.getLogger()
    saved = root.handlers
    root.handlers = []
    try:
        return (yield)
    finally:
        root.handlers = saved
