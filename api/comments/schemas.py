"""
Comment request/response models.

Wire names are the reading client's camelCase (`poemID`, `parentID`,
`createdAt`); Python attributes are snake_case.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

ANONYMOUS_USERNAME = "匿名用户"
USERNAME_MAX_CHARS = 100


class NewCommentRequest(BaseModel):
    # Required-ness of poemID/content is checked in the service so both
    # produce the same 400 envelope as other validation failures.
    model_config = ConfigDict(populate_by_name=True)

    poem_id: int | None = Field(default=None, alias="poemID")
    content: str | None = None
    username: str | None = Field(default=None, max_length=USERNAME_MAX_CHARS)
    parent_id: int | None = Field(default=None, alias="parentID")


class CommentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    poem_id: int = Field(alias="poemID")
    content: str
    username: str
    created_at: datetime = Field(alias="createdAt")
    parent_id: int | None = Field(default=None, alias="parentID")
