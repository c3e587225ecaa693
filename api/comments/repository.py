"""
Comment persistence helpers.
"""

from __future__ import annotations

from typing import Any

from core import db


def list_comments_statement(poem_id: int) -> db.Statement:
    # Oldest first: clients rebuild reply threads in one forward pass.
    return db.Statement(
        """
        SELECT id, poem_id, content, username, created_at, parent_id
        FROM comment
        WHERE poem_id = $1
        ORDER BY created_at ASC, id ASC
        """,
        (poem_id,),
    )


def insert_comment_statement(
    *,
    poem_id: int,
    content: str,
    username: str,
    parent_id: int | None,
) -> db.Statement:
    return db.Statement(
        """
        INSERT INTO comment (poem_id, content, username, parent_id, created_at)
        VALUES ($1, $2, $3, $4, now())
        RETURNING id
        """,
        (poem_id, content, username, parent_id),
    )


async def list_comments(poem_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(list_comments_statement(poem_id))


async def insert_comment(
    *,
    poem_id: int,
    content: str,
    username: str,
    parent_id: int | None = None,
) -> int:
    return await db.insert(
        insert_comment_statement(
            poem_id=poem_id,
            content=content,
            username=username,
            parent_id=parent_id,
        )
    )
