"""
Comment listing and creation.

Creation only checks that the request is complete. Whether `poemID` and
`parentID` point at existing rows is left to the database's constraints.
"""

from __future__ import annotations

from typing import Any

from core.errors import StorageError, ValidationError
from core.params import INT_ID_MAX, INT_ID_MIN

from . import repository, schemas


def to_comment(row: dict[str, Any]) -> schemas.CommentResponse:
    parent_id = row.get("parent_id")
    return schemas.CommentResponse(
        id=int(row["id"]),
        poem_id=int(row["poem_id"]),
        content=str(row.get("content") or ""),
        username=str(row.get("username") or schemas.ANONYMOUS_USERNAME),
        created_at=row["created_at"],
        parent_id=int(parent_id) if parent_id is not None else None,
    )


def _in_id_range(value: int) -> bool:
    return INT_ID_MIN <= value <= INT_ID_MAX


async def list_comments(poem_id: int) -> list[schemas.CommentResponse]:
    try:
        rows = await repository.list_comments(poem_id)
    except StorageError as exc:
        raise StorageError("服务器错误，获取评论失败。") from exc
    return [to_comment(row) for row in rows]


async def create_comment(payload: schemas.NewCommentRequest) -> int:
    """
    Insert one comment and return its generated id.
    """
    if not payload.poem_id:
        raise ValidationError("缺少古诗ID。")
    if not _in_id_range(payload.poem_id):
        raise ValidationError("古诗ID无效。")

    # Whitespace-only counts as empty; otherwise the text is stored as sent.
    if not (payload.content or "").strip():
        raise ValidationError("缺少评论内容。")

    if payload.parent_id is not None and not _in_id_range(payload.parent_id):
        raise ValidationError("回复的评论ID无效。")

    username = (payload.username or "").strip() or schemas.ANONYMOUS_USERNAME

    try:
        return await repository.insert_comment(
            poem_id=payload.poem_id,
            content=payload.content,
            username=username,
            parent_id=payload.parent_id,
        )
    except StorageError as exc:
        raise StorageError("服务器错误，评论添加失败。") from exc
