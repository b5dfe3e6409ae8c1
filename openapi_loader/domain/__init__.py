"""Domain 层：领域模型与抽象接口定义。"""

from .events import ApplicationReadyEvent
from .interfaces import DocumentFetcher, DocumentLoader, DocumentRefresher, OperationCatalog
from .models import ApiOperation, CatalogSnapshot, OpenApiDocumentError

__all__ = [
    "ApiOperation",
    "ApplicationReadyEvent",
    "CatalogSnapshot",
    "DocumentFetcher",
    "DocumentLoader",
    "DocumentRefresher",
    "OpenApiDocumentError",
    "OperationCatalog",
]
