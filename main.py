"""
本地启动入口。

启动方式：`python main.py`

与直接执行 `uvicorn openapi_loader.api.server:app` 的区别：
本入口会在 HTTP 服务真正开始监听之后触发“应用就绪”事件，从而立即加载一次 OpenAPI 文档；
直接使用 uvicorn 命令时只有定时刷新与手动 `/api/openapi/reload`。
"""

import asyncio
from typing import Optional

import uvicorn

from openapi_loader.core.config import settings
from openapi_loader.services.factory import get_application_ready_event

STARTED_POLL_SECONDS = 0.05


def build_server(host: Optional[str] = None, port: Optional[int] = None) -> uvicorn.Server:
    """按配置创建 uvicorn Server；host/port 为空时取自 settings.server。"""

    config = uvicorn.Config(
        "openapi_loader.api.server:app",
        host=host if host is not None else settings.server.host,
        port=port if port is not None else settings.server.port,
        log_level=settings.log_level.lower(),
    )
    return uvicorn.Server(config)


async def serve(server: Optional[uvicorn.Server] = None) -> None:
    """运行服务，并在开始监听后触发一次应用就绪事件。"""

    server = server if server is not None else build_server()
    server_task = asyncio.create_task(server.serve())

    while not server.started:
        if server_task.done():
            # 启动失败（例如端口被占用），直接把异常抛出来
            await server_task
            return
        await asyncio.sleep(STARTED_POLL_SECONDS)

    await get_application_ready_event().fire()
    await server_task


def main() -> None:
    asyncio.run(serve())


if __name__ == "__main__":
    main()
