"""
Poet relationship graph endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter

from core.errors import envelope

from . import service

router = APIRouter()


@router.get("/api/relationships")
async def get_relationships() -> dict:
    graph = await service.relationship_graph()
    return envelope(200, "关系图谱数据获取成功！", graph.model_dump())
