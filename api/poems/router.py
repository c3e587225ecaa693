"""
Poem API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from core.errors import envelope
from core.params import parse_int_id

from . import service

router = APIRouter()


@router.get("/api/poems")
async def list_poems(search: str | None = Query(default=None, max_length=200)) -> dict:
    """
    Poem list with content previews; `search` matches title, poet or dynasty.
    """
    poems = await service.list_poems(search)
    return envelope(200, "古诗列表获取成功！", [poem.model_dump() for poem in poems])


@router.get("/api/poem/{poem_id}")
async def get_poem(poem_id: str) -> dict:
    # Path is parsed by hand so a bad id is a 400 envelope, not a 422.
    parsed_id = parse_int_id(poem_id, message="古诗ID无效。")
    poem = await service.get_poem(parsed_id)
    return envelope(200, "古诗详情获取成功！", poem.model_dump())
