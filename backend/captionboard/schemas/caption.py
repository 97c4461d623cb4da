from __future__ import annotations
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID
from datetime import datetime
from captionboard.schemas.vote import VoteCounts

SORT_MODES: tuple[str, ...] = ("newest", "oldest", "most_liked", "random")

class FlavorRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    slug: str
    description: str | None = None

class ImageRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    url: str
    image_description: str | None = None

class CaptionPublic(BaseModel):
    id: UUID
    content: str
    like_count: int
    created_datetime_utc: datetime
    humor_flavor_id: int | None = None
    image_id: UUID | None = None
    humor_flavor: FlavorRef | None = None
    image: ImageRef | None = None
    vote_counts: VoteCounts
    user_vote: int | None = None
    total_votes: int

class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    total: int
    limit: int
    offset: int
    has_more: bool = Field(alias="hasMore")

class CaptionPage(BaseModel):
    captions: list[CaptionPublic]
    pagination: Pagination

class CaptionSummary(BaseModel):
    id: UUID
    content: str | None = None
    like_count: int
    created_datetime_utc: datetime
    humor_flavor: FlavorRef | None = None

class LikeResult(BaseModel):
    caption_id: UUID
    action: Literal["created", "unchanged"]
    like_count: int
