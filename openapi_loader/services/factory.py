import logging
from functools import lru_cache

from ..core.config import settings
from ..domain.events import ApplicationReadyEvent
from ..domain.interfaces import DocumentLoader
from ..infrastructure.catalog.factory import get_operation_catalog
from ..infrastructure.http.factory import get_document_fetcher
from ..infrastructure.scheduler.fixed_delay import FixedDelayScheduler
from .bootstrap import LoaderBootstrap
from .document_loader import OpenApiDocumentLoader

log = logging.getLogger(__name__)

OPENAPI_REFRESH_JOB_ID = "openapi-document-refresh"


@lru_cache()
def get_document_loader() -> DocumentLoader:
    """
    [工厂方法] 组装并获取 OpenApiDocumentLoader 单例。

    刷新能力使用内存接口目录，拉取客户端使用 httpx。
    """
    url = settings.open_api_url
    log.info(f"正在组装 OpenApiDocumentLoader，文档地址: {url}")
    return OpenApiDocumentLoader(
        fetcher=get_document_fetcher(),
        refresher=get_operation_catalog(),
        url=url,
    )


@lru_cache()
def get_refresh_scheduler() -> FixedDelayScheduler:
    """[工厂方法] 组装 OpenAPI 文档定时刷新调度器单例。"""
    return FixedDelayScheduler(
        get_document_loader().load,
        initial_delay=settings.openapi.refresh_initial_delay,
        interval=settings.openapi.refresh_interval,
        job_id=OPENAPI_REFRESH_JOB_ID,
    )


@lru_cache()
def get_application_ready_event() -> ApplicationReadyEvent:
    """进程级的应用就绪事件单例（由 main.py 在服务开始监听后触发）。"""
    return ApplicationReadyEvent()


@lru_cache()
def get_loader_bootstrap() -> LoaderBootstrap:
    """[工厂方法] 组装启动钩子与定时任务。"""
    scheduler = get_refresh_scheduler() if settings.openapi.scheduler_enabled else None
    return LoaderBootstrap(
        loader=get_document_loader(),
        ready_event=get_application_ready_event(),
        scheduler=scheduler,
    )
