"""接口目录工厂方法。"""

from functools import lru_cache

from ...domain.interfaces import OperationCatalog
from .openapi_catalog import InMemoryOpenApiCatalog


@lru_cache()
def get_operation_catalog() -> OperationCatalog:
    """创建接口目录单例（同时作为加载器的刷新能力）。"""
    return InMemoryOpenApiCatalog()
