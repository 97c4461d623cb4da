from __future__ import annotations
from pydantic import BaseModel
from uuid import UUID
from datetime import datetime

class ImagePublic(BaseModel):
    id: UUID
    url: str
    image_description: str | None = None
    celebrity_name: str | None = None
    additional_context: str | None = None
    created_datetime_utc: datetime
