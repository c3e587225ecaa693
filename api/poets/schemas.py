"""
Graph projection of poets and their relationships.
"""

from __future__ import annotations

from pydantic import BaseModel


class PoetNode(BaseModel):
    # `id` is the poet's name.
    id: str
    dynasty: str
    group: int


class PoetLink(BaseModel):
    source: str
    target: str
    relation: str
    value: int | float


class RelationshipGraph(BaseModel):
    nodes: list[PoetNode]
    links: list[PoetLink]
