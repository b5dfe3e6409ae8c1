"""日志初始化测试。"""

from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

import openapi_loader.core.config as config_module
from openapi_loader.core.logging import setup_logging


class BrokenSettings:
    @property
    def log_level(self) -> str:
        raise RuntimeError("settings exploded")


@pytest.fixture
def bare_root_logger(monkeypatch: pytest.MonkeyPatch) -> logging.Logger:
    """提供一个没有 handler 的根 logger，测试结束后恢复原状。"""

    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    return root


def test_configures_stdout_handler_with_settings_level(
    bare_root_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(config_module, "settings", SimpleNamespace(log_level="warning"))

    setup_logging()

    assert len(bare_root_logger.handlers) == 1
    assert bare_root_logger.level == logging.WARNING


def test_invalid_level_is_rejected(bare_root_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "settings", SimpleNamespace(log_level="LOUD"))

    with pytest.raises(ValueError):
        setup_logging()


def test_unexpected_settings_error_is_not_swallowed(
    bare_root_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
) -> None:
    """只容忍配置缺失/校验失败，其他异常照常抛出。"""

    monkeypatch.setattr(config_module, "settings", BrokenSettings())

    with pytest.raises(RuntimeError):
        setup_logging()


def test_second_call_is_a_no_op(bare_root_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "settings", SimpleNamespace(log_level="INFO"))

    setup_logging()
    setup_logging()

    assert len(bare_root_logger.handlers) == 1
