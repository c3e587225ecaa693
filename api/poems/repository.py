"""
Poem SQL (raw).

Listing returns a content preview (first POEM_PREVIEW_CHARS characters) and is
capped at POEM_LIST_LIMIT rows; both are bound like any other value.
"""

from __future__ import annotations

from typing import Any

from core import db

POEM_PREVIEW_CHARS = 100
POEM_LIST_LIMIT = 200


def like_pattern(search: str) -> str:
    """
    Wrap `search` in wildcards, escaping LIKE metacharacters so they match
    literally.
    """
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def list_poems_statement(search: str | None = None) -> db.Statement:
    # Blank means "no filter"; a real search is bound exactly as sent.
    if not (search or "").strip():
        return db.Statement(
            """
            SELECT
              p.id,
              p.title,
              left(p.content, $1) AS content,
              pt.name AS author,
              pt.dynasty
            FROM poem p
            JOIN poet pt ON pt.id = p.poet_id
            ORDER BY p.id
            LIMIT $2
            """,
            (POEM_PREVIEW_CHARS, POEM_LIST_LIMIT),
        )

    return db.Statement(
        """
        SELECT
          p.id,
          p.title,
          left(p.content, $1) AS content,
          pt.name AS author,
          pt.dynasty
        FROM poem p
        JOIN poet pt ON pt.id = p.poet_id
        WHERE p.title ILIKE $3
           OR pt.name ILIKE $3
           OR pt.dynasty ILIKE $3
        ORDER BY p.id
        LIMIT $2
        """,
        (POEM_PREVIEW_CHARS, POEM_LIST_LIMIT, like_pattern(search)),
    )


def poem_detail_statement(poem_id: int) -> db.Statement:
    return db.Statement(
        """
        SELECT
          p.id,
          p.title,
          p.content,
          pt.name AS author,
          pt.dynasty
        FROM poem p
        JOIN poet pt ON pt.id = p.poet_id
        WHERE p.id = $1
        """,
        (poem_id,),
    )


async def list_poems(statement: db.Statement) -> list[dict[str, Any]]:
    return await db.fetch_all(statement)


async def get_poem(poem_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(poem_detail_statement(poem_id))
