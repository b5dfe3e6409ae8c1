"""FastAPI 服务入口。

提供的核心能力：
- 启动后加载一次 OpenAPI 文档，并按固定延迟定时刷新
- 接口目录查询：概要、操作列表/关键字检索
- 手动触发一次重新加载
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from ..core.logging import setup_logging
from ..domain.interfaces import DocumentLoader, OperationCatalog
from ..infrastructure.catalog.factory import get_operation_catalog
from ..services.factory import get_document_loader, get_loader_bootstrap
from .schemas import (
    CatalogSummaryResponse,
    HealthResponse,
    OperationListResponse,
    ReloadResponse,
)

setup_logging()


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """FastAPI 生命周期管理。

    - 启动：注册启动钩子（等待就绪事件）并启动定时刷新
    - 关闭：停止定时刷新，取消未完成的启动加载
    """

    bootstrap = get_loader_bootstrap()
    bootstrap.start()
    try:
        yield
    finally:
        await bootstrap.stop()


app = FastAPI(title="OpenAPI Loader API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """健康检查。"""

    return HealthResponse()


@app.get("/api/openapi/catalog", response_model=CatalogSummaryResponse)
async def catalog_summary(
    catalog: OperationCatalog = Depends(get_operation_catalog),
    loader: DocumentLoader = Depends(get_document_loader),
) -> CatalogSummaryResponse:
    """获取当前接口目录概要。"""

    snapshot = catalog.snapshot()
    return CatalogSummaryResponse(
        source_url=loader.url,
        spec_version=snapshot.spec_version,
        title=snapshot.title,
        api_version=snapshot.api_version,
        operations_count=len(snapshot.operations),
        refreshed_at=snapshot.refreshed_at,
        refresh_count=snapshot.refresh_count,
    )


@app.get("/api/openapi/operations", response_model=OperationListResponse)
async def list_operations(
    q: str | None = Query(default=None, description="关键字（空格分隔，全部命中才返回）"),
    limit: int = Query(default=50, ge=1, le=500, description="返回数量上限"),
    catalog: OperationCatalog = Depends(get_operation_catalog),
) -> OperationListResponse:
    """获取接口操作列表（支持关键字检索）。"""

    items = catalog.search(q or "", limit=limit)
    return OperationListResponse(items=items)


@app.post("/api/openapi/reload", response_model=ReloadResponse)
async def reload_document(
    loader: DocumentLoader = Depends(get_document_loader),
) -> ReloadResponse:
    """立即执行一次加载（失败同样只记录日志，不返回 5xx）。"""

    success = await loader.load()
    return ReloadResponse(success=success, url=loader.url)
