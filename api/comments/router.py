"""
Comment API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from core.errors import envelope
from core.params import parse_int_id

from . import schemas, service

router = APIRouter()


@router.get("/api/comments/{poem_id}")
async def list_comments(poem_id: str) -> dict:
    parsed_id = parse_int_id(poem_id, message="古诗ID无效。")
    comments = await service.list_comments(parsed_id)
    return envelope(
        200,
        "评论获取成功！",
        [comment.model_dump(mode="json", by_alias=True) for comment in comments],
    )


@router.post("/api/comments", status_code=status.HTTP_201_CREATED)
async def create_comment(request: schemas.NewCommentRequest) -> dict:
    inserted_id = await service.create_comment(request)
    return envelope(201, "评论添加成功！", insertedId=inserted_id)
