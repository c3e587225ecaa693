"""
Poem response shapes.
"""

from __future__ import annotations

from pydantic import BaseModel


class PoemResponse(BaseModel):
    id: int
    title: str
    content: str
    author: str
    dynasty: str
