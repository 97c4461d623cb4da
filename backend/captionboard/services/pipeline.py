"""
Client for the external captioning pipeline.

The pipeline owns the object store (presigned uploads), image registration and
caption generation. Calls are made on behalf of the signed-in user: their
bearer token is forwarded unchanged. Nothing is retried.
"""
from __future__ import annotations
from typing import Any, AsyncGenerator
import httpx
import structlog
from captionboard.config import settings
from captionboard.errors import UpstreamFailure

log = structlog.get_logger()

PRESIGNED_URL_PATH = "/pipeline/generate-presigned-url"
REGISTER_IMAGE_PATH = "/pipeline/upload-image-from-url"
GENERATE_CAPTIONS_PATH = "/pipeline/generate-captions"


class PipelineClient:
    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def _post(self, path: str, token: str, payload: dict[str, Any]) -> Any:
        try:
            r = await self._http.post(path, json=payload, headers={"Authorization": f"Bearer {token}"})
        except httpx.HTTPError as e:
            log.error("pipeline_unreachable", path=path, error=str(e))
            raise UpstreamFailure("Captioning service unreachable") from e
        if r.status_code < 200 or r.status_code >= 300:
            log.error("pipeline_error", path=path, status=r.status_code, body=r.text[:500])
            raise UpstreamFailure(f"API error: {r.status_code}")
        try:
            return r.json()
        except ValueError as e:
            log.error("pipeline_bad_json", path=path, status=r.status_code)
            raise UpstreamFailure("Captioning service returned invalid JSON") from e

    async def generate_presigned_url(self, token: str, content_type: str) -> dict[str, Any]:
        """Returns ``{"presignedUrl": ..., "cdnUrl": ...}``."""
        return await self._post(PRESIGNED_URL_PATH, token, {"contentType": content_type})

    async def register_image(self, token: str, image_url: str, is_common_use: bool = False) -> dict[str, Any]:
        """Returns ``{"imageId": ..., "now": ...}``."""
        return await self._post(REGISTER_IMAGE_PATH, token, {"imageUrl": image_url, "isCommonUse": is_common_use})

    async def generate_captions(self, token: str, image_id: str) -> Any:
        return await self._post(GENERATE_CAPTIONS_PATH, token, {"imageId": image_id})


def build_http_client(**kwargs) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.pipeline_base_url,
        timeout=settings.pipeline_timeout_seconds,
        **kwargs,
    )


async def get_pipeline_client() -> AsyncGenerator[PipelineClient, None]:
    async with build_http_client() as http:
        yield PipelineClient(http)
