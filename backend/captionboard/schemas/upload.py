from __future__ import annotations
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ALLOWED_CONTENT_TYPES = frozenset({
    "image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif", "image/heic",
})

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class PresignedUrlRequest(_CamelModel):
    content_type: str | None = None

class PresignedUrlResponse(_CamelModel):
    success: bool = True
    presigned_url: str
    cdn_url: str

class RegisterImageRequest(_CamelModel):
    image_url: str | None = None

class RegisterImageResponse(_CamelModel):
    success: bool = True
    image_id: str
    now: int | float | str | None = None

class GenerateCaptionsRequest(_CamelModel):
    image_id: str | None = None
