"""HTTP 拉取客户端工厂方法。"""

from functools import lru_cache

from ...core.config import settings
from ...domain.interfaces import DocumentFetcher
from .http_fetcher import HttpDocumentFetcher


@lru_cache
def get_document_fetcher() -> DocumentFetcher:
    """创建并缓存文档拉取客户端实例。"""

    return HttpDocumentFetcher(timeout=settings.openapi.request_timeout)
