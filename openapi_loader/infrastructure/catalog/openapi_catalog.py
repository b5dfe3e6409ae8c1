"""内存版 OpenAPI 接口目录。

作为加载器的下游刷新能力：接收 OpenAPI JSON 原文，展开为 `ApiOperation` 列表，
并整体替换当前快照。解析失败时保留旧快照不变。
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from ...domain.interfaces import OperationCatalog
from ...domain.models import ApiOperation, CatalogSnapshot, OpenApiDocumentError

log = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


def parse_operations(paths: dict) -> list[ApiOperation]:
    """将 OpenAPI `paths` 展开为接口操作列表（保持文档顺序）。

    Args:
        paths: OpenAPI 文档中的 `paths` 对象。

    Returns:
        接口操作列表；非 HTTP 方法的键（例如 `parameters`、`summary`）会被跳过。

    Raises:
        OpenApiDocumentError: path item 或 operation 不是 JSON 对象。
    """

    operations: list[ApiOperation] = []
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            raise OpenApiDocumentError(f"paths['{path}'] 必须是对象")

        for method, operation in path_item.items():
            if method.lower() not in HTTP_METHODS:
                continue
            if not isinstance(operation, dict):
                raise OpenApiDocumentError(f"paths['{path}'].{method} 必须是对象")

            tags = operation.get("tags") or []
            operations.append(
                ApiOperation(
                    method=method.upper(),
                    path=path,
                    operation_id=_optional_str(operation.get("operationId")),
                    summary=_optional_str(operation.get("summary")),
                    description=_optional_str(operation.get("description")),
                    tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
                    deprecated=bool(operation.get("deprecated", False)),
                )
            )
    return operations


class InMemoryOpenApiCatalog(OperationCatalog):
    """基于内存快照的接口目录实现。"""

    def __init__(self) -> None:
        self._snapshot = CatalogSnapshot()

    async def refresh_from_json(self, document: str) -> None:
        """解析 OpenAPI 文档并整体替换快照。

        Raises:
            OpenApiDocumentError: 文档不是合法的 OpenAPI JSON 对象。
        """

        try:
            raw = json.loads(document)
        except (TypeError, ValueError) as exc:
            raise OpenApiDocumentError(f"OpenAPI 文档不是合法的 JSON: {exc}") from exc

        if not isinstance(raw, dict):
            raise OpenApiDocumentError("OpenAPI 文档顶层必须是 JSON 对象")

        spec_version = raw.get("openapi", raw.get("swagger"))
        if not isinstance(spec_version, str):
            raise OpenApiDocumentError("OpenAPI 文档缺少 openapi/swagger 版本字段")

        paths = raw.get("paths", {})
        if not isinstance(paths, dict):
            raise OpenApiDocumentError("OpenAPI 文档中的 paths 必须是对象")

        info = raw.get("info") if isinstance(raw.get("info"), dict) else {}
        operations = parse_operations(paths)

        # 单次赋值完成替换，读取方不会看到半成品
        self._snapshot = CatalogSnapshot(
            spec_version=spec_version,
            title=_optional_str(info.get("title")),
            api_version=_optional_str(info.get("version")),
            operations=operations,
            refreshed_at=datetime.now(timezone.utc),
            refresh_count=self._snapshot.refresh_count + 1,
        )
        log.info(f"接口目录已刷新: {len(operations)} 个操作 (openapi {spec_version})")

    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    def search(self, query: str, limit: int = 20) -> list[ApiOperation]:
        """按关键字检索：所有词都出现在操作文本中（不区分大小写）才算命中。"""

        terms = query.lower().split()
        operations = self._snapshot.operations
        if not terms:
            return operations[:limit]

        matched: list[ApiOperation] = []
        for op in operations:
            content = op.content.lower()
            if all(term in content for term in terms):
                matched.append(op)
                if len(matched) >= limit:
                    break
        return matched
