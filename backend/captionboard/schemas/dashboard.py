from __future__ import annotations
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from captionboard.schemas.caption import CaptionSummary

class DashboardStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    total_captions: int
    total_likes: int
    likes_given: int

class Dashboard(BaseModel):
    user_id: str
    email: str | None = None
    captions: list[CaptionSummary]
    stats: DashboardStats
