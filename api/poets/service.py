"""
Relationship graph assembly.

Nodes come from every poet, links from every relationship row. Link endpoints
are the raw names stored on the relationship; they are not checked against the
node set here, only reported when they dangle.
"""

from __future__ import annotations

import logging
from typing import Any

from core.errors import StorageError

from . import repository, schemas
from .dynasty import dynasty_group

logger = logging.getLogger(__name__)


def to_node(row: dict[str, Any]) -> schemas.PoetNode:
    dynasty = str(row.get("dynasty") or "")
    return schemas.PoetNode(
        id=str(row["name"]),
        dynasty=dynasty,
        group=dynasty_group(dynasty),
    )


def to_link(row: dict[str, Any]) -> schemas.PoetLink:
    return schemas.PoetLink(
        source=str(row["poet_a_name"]),
        target=str(row["poet_b_name"]),
        relation=str(row.get("relation") or ""),
        value=row.get("value") or 0,
    )


def orphan_links(graph: schemas.RelationshipGraph) -> list[schemas.PoetLink]:
    names = {node.id for node in graph.nodes}
    return [link for link in graph.links if link.source not in names or link.target not in names]


async def relationship_graph() -> schemas.RelationshipGraph:
    try:
        poet_rows = await repository.list_poets()
        relationship_rows = await repository.list_relationships()
    except StorageError as exc:
        raise StorageError("服务器错误，获取关系图谱数据失败。") from exc

    graph = schemas.RelationshipGraph(
        nodes=[to_node(row) for row in poet_rows],
        links=[to_link(row) for row in relationship_rows],
    )

    orphans = orphan_links(graph)
    if orphans:
        logger.warning(
            "relationship_orphan_links count=%s first=%s->%s",
            len(orphans),
            orphans[0].source,
            orphans[0].target,
        )
    return graph
