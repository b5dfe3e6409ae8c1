from datetime import timedelta
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- 路径配置 ---
# openapi_loader/core/config.py -> openapi_loader -> 项目根目录
PROJECT_ROOT = Path(__file__).resolve().parents[2]
BASE_DIR = PROJECT_ROOT

# 优先使用项目根目录的 .env；如果不存在，则回退到上一级目录（便于 monorepo 复用同一份 .env）。
_ENV_CANDIDATES = [PROJECT_ROOT / ".env", PROJECT_ROOT.parent / ".env"]
ENV_FILE_PATH = next((p for p in _ENV_CANDIDATES if p.exists()), _ENV_CANDIDATES[0])

# OpenAPI 文档在本服务中的默认路径（FastAPI 内置）
DEFAULT_OPENAPI_PATH = "/openapi.json"


class BaseConfigSettings(BaseSettings):
    """
    基础配置类，定义通用的加载行为。
    """
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        env_file_encoding='utf-8',
        extra="ignore",           # 忽略多余字段
        frozen=True,              # 不可变
        case_sensitive=False,     # 大小写不敏感
    )


class ServerSettings(BaseConfigSettings):
    """HTTP 服务监听配置 (SERVER_*)"""
    model_config = SettingsConfigDict(env_prefix="SERVER_")

    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)


class OpenApiLoaderSettings(BaseConfigSettings):
    """
    OpenAPI 文档加载配置 (CHATBOT_OPEN_API_*)

    * 时间间隔同时支持 ISO 8601 (例如 `PT5M`) 与秒数。
    """
    model_config = SettingsConfigDict(env_prefix="CHATBOT_OPEN_API_")

    url: Optional[str] = None  # 为空时根据 server.port 推导
    refresh_initial_delay: timedelta = timedelta(minutes=5)
    refresh_interval: timedelta = timedelta(minutes=30)
    request_timeout: Optional[float] = None  # 为空时使用 httpx 默认超时
    scheduler_enabled: bool = True

    @field_validator("refresh_initial_delay")
    @classmethod
    def _check_initial_delay(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("refresh_initial_delay 不能为负数")
        return value

    @field_validator("refresh_interval")
    @classmethod
    def _check_interval(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("refresh_interval 必须大于 0")
        return value

    @field_validator("request_timeout")
    @classmethod
    def _check_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("request_timeout 必须大于 0")
        return value


# =============================================================================
#  主配置聚合类
# =============================================================================

class Settings(BaseConfigSettings):
    """
    主配置类，聚合所有子配置。
    """
    # --- 全局 ---
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # --- 模块 ---
    server: ServerSettings = Field(default_factory=ServerSettings)
    openapi: OpenApiLoaderSettings = Field(default_factory=OpenApiLoaderSettings)

    @property
    def open_api_url(self) -> str:
        """
        返回 OpenAPI 文档地址。

        未显式配置 `CHATBOT_OPEN_API_URL` 时，指向本机服务自身的 OpenAPI 文档。
        """
        if self.openapi.url:
            return self.openapi.url
        return f"http://localhost:{self.server.port}{DEFAULT_OPENAPI_PATH}"


# --- 实例化 ---
try:
    settings = Settings()
except Exception as e:
    print(f"!!! 严重错误: 无法从 {ENV_FILE_PATH} 加载配置。")
    print(f"错误详情: {e}")
    if "validation error" in str(e).lower():
        print("提示: 请检查 .env 中 CHATBOT_OPEN_API_* 的时间格式（例如 PT5M）是否正确。")
    raise e
