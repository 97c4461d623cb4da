from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Text, DateTime, ForeignKey, UniqueConstraint, Uuid, func
from captionboard.db import Base
from captionboard.models.image import Image

class HumorFlavor(Base):
    __tablename__ = "humor_flavors"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text())

class Caption(Base):
    __tablename__ = "captions"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=uuid.uuid4)
    content: Mapped[str | None] = mapped_column(Text())
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    humor_flavor_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("humor_flavors.id", ondelete="SET NULL"), index=True)
    image_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(), ForeignKey("images.id", ondelete="SET NULL"), index=True)
    profile_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(), index=True)  # author
    created_datetime_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    humor_flavor: Mapped[HumorFlavor | None] = relationship(lazy="raise")
    image: Mapped[Image | None] = relationship(lazy="raise")

class CaptionLike(Base):
    __tablename__ = "caption_likes"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=uuid.uuid4)
    caption_id: Mapped[uuid.UUID] = mapped_column(Uuid(), ForeignKey("captions.id", ondelete="CASCADE"), index=True, nullable=False)
    profile_id: Mapped[uuid.UUID] = mapped_column(Uuid(), index=True, nullable=False)
    created_datetime_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("caption_id", "profile_id", name="uq_caption_likes_caption_profile"),
    )
