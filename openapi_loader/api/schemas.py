"""API 层请求/响应模型（Pydantic）。

说明：
- API 层模型以“对外契约”为准，允许与 domain 层模型重叠但保持可控。
- 本模块仅包含轻量的 schema，不做业务逻辑。
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ..domain.models import ApiOperation


class HealthResponse(BaseModel):
    """健康检查响应。"""

    status: str = Field(default="ok", description="服务状态")


class CatalogSummaryResponse(BaseModel):
    """接口目录概要。"""

    source_url: str = Field(..., description="OpenAPI 文档地址")
    spec_version: str | None = Field(default=None, description="openapi/swagger 版本号")
    title: str | None = Field(default=None, description="info.title")
    api_version: str | None = Field(default=None, description="info.version")
    operations_count: int = Field(default=0, ge=0, description="接口操作数量")
    refreshed_at: datetime | None = Field(default=None, description="最近一次成功刷新时间（UTC）")
    refresh_count: int = Field(default=0, ge=0, description="累计成功刷新次数")


class OperationListResponse(BaseModel):
    """接口操作列表响应。"""

    items: list[ApiOperation] = Field(default_factory=list, description="接口操作列表")


class ReloadResponse(BaseModel):
    """手动重新加载响应。"""

    success: bool = Field(..., description="本次加载是否成功")
    url: str = Field(..., description="OpenAPI 文档地址")
