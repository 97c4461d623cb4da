from __future__ import annotations
from typing import Literal
from pydantic import BaseModel, ConfigDict, StrictInt
from uuid import UUID
from datetime import datetime

class VoteCounts(BaseModel):
    upvotes: int = 0
    downvotes: int = 0
    neutrals: int = 0

    @property
    def total(self) -> int:
        return self.upvotes + self.downvotes + self.neutrals

class VoteCreate(BaseModel):
    # Both optional so missing fields get the same 400 wording as bad values
    caption_id: UUID | None = None
    vote_value: StrictInt | None = None

class VotePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    caption_id: UUID
    profile_id: UUID
    vote_value: int
    created_datetime_utc: datetime
    modified_datetime_utc: datetime | None = None

class VoteResult(BaseModel):
    action: Literal["created", "updated"]
    vote: VotePublic
    previous_vote: int | None = None

class VoteSummary(BaseModel):
    caption_id: UUID
    vote_counts: VoteCounts
    user_vote: int | None = None
    total_votes: int
