from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from uuid import UUID
from captionboard.schemas.vote import VoteCounts

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class BasicStats(_CamelModel):
    total_captions: int
    total_likes: int
    total_votes: int

class HumorFlavorStats(_CamelModel):
    id: int
    slug: str
    description: str
    caption_count: int
    total_likes: int
    avg_likes: float

class EngagementMetrics(_CamelModel):
    captions_with_likes: int
    avg_likes_per_caption: float
    max_likes: int
    like_rate: float  # percent of captions with at least one like

class TopCaption(_CamelModel):
    id: UUID
    content: str | None = None
    like_count: int
    humor_flavor_id: int | None = None
    humor_flavor_slug: str | None = None

class CaptionAnalytics(_CamelModel):
    basic_stats: BasicStats
    top_captions: list[TopCaption]
    humor_flavor_stats: list[HumorFlavorStats]
    vote_stats: VoteCounts
    engagement_metrics: EngagementMetrics
    insights: list[str]

class AnalyticsResponse(BaseModel):
    success: bool = True
    data: CaptionAnalytics
    timestamp: datetime
