"""
Poem listing and detail.
"""

from __future__ import annotations

import logging
from typing import Any

from core.errors import NotFoundError, StorageError

from . import repository, schemas

logger = logging.getLogger(__name__)


def to_poem(row: dict[str, Any]) -> schemas.PoemResponse:
    return schemas.PoemResponse(
        id=int(row["id"]),
        title=str(row.get("title") or ""),
        content=str(row.get("content") or ""),
        author=str(row.get("author") or ""),
        dynasty=str(row.get("dynasty") or ""),
    )


async def list_poems(search: str | None = None) -> list[schemas.PoemResponse]:
    statement = repository.list_poems_statement(search)
    logger.debug(
        "poem_list search=%r sql=%s args=%r",
        search,
        statement.compact(),
        statement.args,
    )
    try:
        rows = await repository.list_poems(statement)
    except StorageError as exc:
        raise StorageError("服务器错误，获取古诗列表失败。") from exc
    return [to_poem(row) for row in rows]


async def get_poem(poem_id: int) -> schemas.PoemResponse:
    try:
        row = await repository.get_poem(poem_id)
    except StorageError as exc:
        raise StorageError("服务器错误，获取古诗详情失败。") from exc

    if row is None:
        raise NotFoundError("未找到该古诗。")
    return to_poem(row)
