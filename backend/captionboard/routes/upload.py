from __future__ import annotations
from typing import Any
import structlog
from fastapi import APIRouter, Depends

from captionboard.auth_deps import get_principal
from captionboard.errors import InvalidInput, UpstreamFailure
from captionboard.schemas.common import Envelope
from captionboard.schemas.upload import (
    ALLOWED_CONTENT_TYPES,
    GenerateCaptionsRequest,
    PresignedUrlRequest,
    PresignedUrlResponse,
    RegisterImageRequest,
    RegisterImageResponse,
)
from captionboard.security import Principal
from captionboard.services.pipeline import PipelineClient, get_pipeline_client

log = structlog.get_logger()

router = APIRouter(prefix="/upload", tags=["upload"])

def _require_keys(data: Any, *keys: str) -> dict[str, Any]:
    if not isinstance(data, dict) or any(data.get(k) is None for k in keys):
        log.error("pipeline_incomplete_response", expected=list(keys))
        raise UpstreamFailure("Captioning service returned an incomplete response")
    return data

@router.post("/presigned-url", response_model=PresignedUrlResponse)
async def presigned_url(
    payload: PresignedUrlRequest,
    principal: Principal = Depends(get_principal),
    pipeline: PipelineClient = Depends(get_pipeline_client),
):
    if not payload.content_type or payload.content_type not in ALLOWED_CONTENT_TYPES:
        raise InvalidInput("Invalid content type")
    data = _require_keys(
        await pipeline.generate_presigned_url(principal.access_token, payload.content_type),
        "presignedUrl", "cdnUrl",
    )
    log.info("presigned_url_issued", content_type=payload.content_type)
    return PresignedUrlResponse(presigned_url=data.get("presignedUrl"), cdn_url=data.get("cdnUrl"))

@router.post("/register-image", response_model=RegisterImageResponse)
async def register_image(
    payload: RegisterImageRequest,
    principal: Principal = Depends(get_principal),
    pipeline: PipelineClient = Depends(get_pipeline_client),
):
    if not payload.image_url:
        raise InvalidInput("Image URL is required")
    data = _require_keys(await pipeline.register_image(principal.access_token, payload.image_url), "imageId")
    log.info("image_registered", image_id=data.get("imageId"))
    return RegisterImageResponse(image_id=str(data.get("imageId")), now=data.get("now"))

@router.post("/generate-captions", response_model=Envelope[Any])
async def generate_captions(
    payload: GenerateCaptionsRequest,
    principal: Principal = Depends(get_principal),
    pipeline: PipelineClient = Depends(get_pipeline_client),
):
    if not payload.image_id:
        raise InvalidInput("Image ID is required")
    data = await pipeline.generate_captions(principal.access_token, payload.image_id)
    log.info("captions_generated", image_id=payload.image_id, count=len(data) if isinstance(data, list) else None)
    return Envelope(data=data)
