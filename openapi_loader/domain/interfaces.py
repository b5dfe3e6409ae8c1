"""领域层抽象接口定义（DDD）。

本模块集中定义两类接口：
1) 基础设施抽象：由 `openapi_loader/infrastructure/` 提供实现（HTTP 拉取、文档目录、调度器）
2) 业务编排抽象：由 `openapi_loader/services/` 提供实现（文档加载）

加载器只依赖这里的抽象，刷新能力通过构造函数显式注入，而不是隐式发现。
"""

from abc import ABC, abstractmethod

from .models import ApiOperation, CatalogSnapshot


class DocumentFetcher(ABC):
    """远程文档拉取抽象（例如基于 httpx 的 HTTP GET）。"""

    @abstractmethod
    async def fetch(self, url: str) -> str:
        """拉取远程文档并以文本形式返回。

        Args:
            url: 文档地址。

        Returns:
            响应体文本。

        Raises:
            httpx.HTTPStatusError: 响应状态码非 2xx。
            httpx.RequestError: 网络错误或超时。
        """


class DocumentRefresher(ABC):
    """刷新能力抽象：接收原始 JSON 文本并重建可检索的表示。"""

    @abstractmethod
    async def refresh_from_json(self, document: str) -> None:
        """使用原始文档文本刷新下游数据。

        Args:
            document: 原始 JSON 文本（按值传递，不做任何预处理）。
        """


class OperationCatalog(DocumentRefresher):
    """可查询的接口目录（刷新能力的一种实现形态）。"""

    @abstractmethod
    def snapshot(self) -> CatalogSnapshot:
        """返回当前快照；尚未刷新过时返回空快照。"""

    @abstractmethod
    def search(self, query: str, limit: int = 20) -> list[ApiOperation]:
        """按关键字检索接口操作。"""


class DocumentLoader(ABC):
    """文档加载编排抽象（拉取 -> 刷新 -> 记录日志）。"""

    @property
    @abstractmethod
    def url(self) -> str:
        """加载的目标地址。"""

    @abstractmethod
    async def load(self) -> bool:
        """执行一次加载。

        Returns:
            是否成功；任何失败都只记录日志，不会向外抛出。
        """
