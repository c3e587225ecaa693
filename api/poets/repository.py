"""
Poet graph SQL (raw).
"""

from __future__ import annotations

from typing import Any

from core import db


def poets_statement() -> db.Statement:
    return db.Statement(
        """
        SELECT name, dynasty
        FROM poet
        """
    )


def relationships_statement() -> db.Statement:
    return db.Statement(
        """
        SELECT poet_a_name, poet_b_name, relation, value
        FROM poet_relationship
        """
    )


async def list_poets() -> list[dict[str, Any]]:
    return await db.fetch_all(poets_statement())


async def list_relationships() -> list[dict[str, Any]]:
    return await db.fetch_all(relationships_statement())
