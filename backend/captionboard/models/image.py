from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, Text, DateTime, Uuid, func
from captionboard.db import Base

class Image(Base):
    __tablename__ = "images"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=uuid.uuid4)
    url: Mapped[str] = mapped_column(Text(), nullable=False)
    image_description: Mapped[str | None] = mapped_column(Text())
    celebrity_recognition: Mapped[str | None] = mapped_column(Text())  # raw JSON from the vision model
    additional_context: Mapped[str | None] = mapped_column(Text())
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="0")
    profile_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(), index=True)
    created_datetime_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
