"""核心领域数据模型（Pydantic）。

该模块承载加载/刷新流程中会跨层传递的数据结构，例如：
- `ApiOperation`：OpenAPI 文档中的单个接口操作（path + method）
- `CatalogSnapshot`：某一次刷新后得到的完整接口目录快照

OpenAPI 原始文档本身不建模，始终以原始文本（`str`）在加载器与刷新能力之间传递。
"""

from datetime import datetime

from pydantic import BaseModel, Field


class OpenApiDocumentError(ValueError):
    """OpenAPI 文档内容无法解析（非 JSON、非对象或结构不合法）。"""


class ApiOperation(BaseModel):
    """OpenAPI 文档中的单个接口操作。

    Attributes:
        method: HTTP 方法（大写），例如 `GET`。
        path: 接口路径模板，例如 `/pets/{petId}`。
        operation_id: `operationId`（可选）。
        summary: 简要说明（可选）。
        description: 详细说明（可选）。
        tags: 分组标签。
        deprecated: 是否已废弃。
    """

    method: str = Field(..., description="HTTP 方法（大写）")
    path: str = Field(..., description="接口路径模板")
    operation_id: str | None = Field(default=None, description="operationId（可选）")
    summary: str | None = Field(default=None, description="简要说明（可选）")
    description: str | None = Field(default=None, description="详细说明（可选）")
    tags: list[str] = Field(default_factory=list, description="分组标签")
    deprecated: bool = Field(default=False, description="是否已废弃")

    @property
    def content(self) -> str:
        """用于检索/向量化的文本表示。"""
        lines = [f"{self.method} {self.path}"]
        if self.operation_id:
            lines.append(f"operationId: {self.operation_id}")
        if self.tags:
            lines.append(f"tags: {', '.join(self.tags)}")
        if self.summary:
            lines.append(self.summary)
        if self.description:
            lines.append(self.description)
        return "\n".join(lines)


class CatalogSnapshot(BaseModel):
    """一次成功刷新后得到的接口目录快照（只读使用）。"""

    spec_version: str | None = Field(default=None, description="openapi/swagger 版本号")
    title: str | None = Field(default=None, description="info.title")
    api_version: str | None = Field(default=None, description="info.version")
    operations: list[ApiOperation] = Field(default_factory=list, description="接口操作列表（保持文档顺序）")
    refreshed_at: datetime | None = Field(default=None, description="刷新时间（UTC）")
    refresh_count: int = Field(default=0, ge=0, description="累计成功刷新次数")
