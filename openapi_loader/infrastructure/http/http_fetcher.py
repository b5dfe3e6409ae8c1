import logging
from typing import Optional

import httpx

from ...domain.interfaces import DocumentFetcher

# 初始化日志
log = logging.getLogger(__name__)


class HttpDocumentFetcher(DocumentFetcher):
    def __init__(
        self,
        timeout: Optional[float] = None,
        headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        初始化基于 httpx 的文档拉取客户端。

        :param timeout: 请求超时（秒）；为空时使用 httpx 默认超时。
        :param headers: 额外请求头。
        :param transport: 自定义传输层（测试中用于注入 MockTransport）。
        """
        self.headers = {"Accept": "application/json"}
        if headers:
            self.headers.update(headers)

        self.timeout = timeout
        self._transport = transport

        timeout_desc = f"{self.timeout}s" if self.timeout is not None else "httpx 默认"
        log.debug(f"HTTP 文档拉取客户端已初始化，超时: {timeout_desc}")

    async def fetch(self, url: str) -> str:
        """
        [异步] GET 指定地址并返回响应文本。

        状态码非 2xx 时抛出 `httpx.HTTPStatusError`，网络错误/超时抛出 `httpx.RequestError`，
        由调用方决定如何处理。
        """
        client_kwargs: dict = {"headers": self.headers, "follow_redirects": True}
        if self.timeout is not None:
            client_kwargs["timeout"] = self.timeout
        if self._transport is not None:
            client_kwargs["transport"] = self._transport

        async with httpx.AsyncClient(**client_kwargs) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.text
