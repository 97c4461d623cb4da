from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, SmallInteger, UniqueConstraint, Uuid, func
from captionboard.db import Base

class CaptionVote(Base):
    __tablename__ = "caption_votes"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=uuid.uuid4)
    caption_id: Mapped[uuid.UUID] = mapped_column(Uuid(), ForeignKey("captions.id", ondelete="CASCADE"), index=True, nullable=False)
    profile_id: Mapped[uuid.UUID] = mapped_column(Uuid(), index=True, nullable=False)
    vote_value: Mapped[int] = mapped_column(SmallInteger, nullable=False)  # -1 down | 0 neutral | 1 up
    created_datetime_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    modified_datetime_utc: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    __table_args__ = (
        CheckConstraint("vote_value IN (-1, 0, 1)", name="ck_caption_votes_value"),
        # One row per voter per caption; a racing second insert fails here instead of duplicating
        UniqueConstraint("caption_id", "profile_id", name="uq_caption_votes_caption_profile"),
    )
