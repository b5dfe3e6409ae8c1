import logging
import os
import sys

from pydantic import ValidationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging():
    """
    配置全局日志记录器。
    此函数应在应用启动时（例如 main.py）被调用一次。
    """
    # 避免重复配置（例如被多次 import 或在测试中重复调用）
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    # 获取日志级别（优先环境变量；如存在 settings 则以 settings 为准）
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    try:
        from .config import settings  # 延迟导入，避免因配置缺失导致日志不可用

        log_level = getattr(settings, "log_level", log_level).upper()
    except (ImportError, ValidationError):
        # 配置校验失败时，仍然允许日志系统工作（settings 模块会自行打印错误详情）
        pass

    numeric_level = getattr(logging, log_level, None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"无效的日志级别: {log_level}")

    # stream=sys.stdout 确保日志输出到标准输出，这在容器部署中更友好
    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        stream=sys.stdout
    )

    # APScheduler 每次触发都会打 INFO，降一级避免刷屏
    logging.getLogger("apscheduler").setLevel(max(numeric_level, logging.WARNING))

    logging.getLogger(__name__).info(f"日志系统已初始化，级别: {log_level}")
