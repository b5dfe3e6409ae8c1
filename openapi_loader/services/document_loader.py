"""OpenAPI 文档加载服务（业务编排）。

单次加载流程：GET 文档地址 -> 将响应原文交给刷新能力 -> 记录日志。
任何失败（网络错误、超时、非 2xx、刷新能力抛出的异常）都只记录一条 WARNING，
不会向调用方传播，也不会重试；下一次调度即是唯一的“重试”。
"""

from __future__ import annotations

import logging

from ..domain.interfaces import DocumentFetcher, DocumentLoader, DocumentRefresher

log = logging.getLogger(__name__)


class OpenApiDocumentLoader(DocumentLoader):
    """OpenAPI 文档加载器实现（无状态，每次调用相互独立）。"""

    def __init__(
        self,
        *,
        fetcher: DocumentFetcher,
        refresher: DocumentRefresher,
        url: str,
    ) -> None:
        """初始化加载器。

        Args:
            fetcher: 文档拉取客户端。
            refresher: 下游刷新能力（接收原始 JSON 文本）。
            url: OpenAPI 文档地址。
        """

        self._fetcher = fetcher
        self._refresher = refresher
        self._url = url

    @property
    def url(self) -> str:
        return self._url

    async def load(self) -> bool:
        try:
            log.info(f"开始从 {self._url} 加载 OpenAPI 文档。")
            document = await self._fetcher.fetch(self._url)
            await self._refresher.refresh_from_json(document)
            log.info("OpenAPI 文档加载完成。")
            return True
        except Exception as exc:
            log.warning(f"从 {self._url} 加载 OpenAPI 文档失败: {exc}")
            return False
