from __future__ import annotations
from typing import Any
from uuid import UUID
import httpx
from captionboard.client.session import SessionChannel


class ApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CaptionboardApi:
    """Thin async client for the captionboard HTTP API, authenticated from a SessionChannel."""

    def __init__(self, http: httpx.AsyncClient, sessions: SessionChannel):
        self._http = http
        self._sessions = sessions

    def _headers(self) -> dict[str, str]:
        s = self._sessions.current
        return {"Authorization": f"Bearer {s.access_token}"} if s else {}

    async def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        try:
            r = await self._http.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            raise ApiError(f"Request failed: {e}") from e
        try:
            body = r.json()
        except ValueError as e:
            raise ApiError(f"Unexpected response ({r.status_code})", r.status_code) from e
        if r.status_code >= 400 or not body.get("success", False):
            raise ApiError(body.get("error") or f"Request failed ({r.status_code})", r.status_code)
        return body

    async def submit_vote(self, caption_id: UUID | str, vote_value: int) -> dict[str, Any]:
        body = await self._request("POST", "/vote", json={"caption_id": str(caption_id), "vote_value": vote_value})
        return body["data"]

    async def vote_summary(self, caption_id: UUID | str) -> dict[str, Any]:
        body = await self._request("GET", "/vote", params={"caption_id": str(caption_id)})
        return body["data"]

    async def list_captions(self, sort: str = "newest", limit: int = 10, offset: int = 0) -> dict[str, Any]:
        body = await self._request("GET", "/captions", params={"sort": sort, "limit": limit, "offset": offset})
        return body["data"]

    async def like_caption(self, caption_id: UUID | str) -> dict[str, Any]:
        body = await self._request("POST", f"/captions/{caption_id}/like")
        return body["data"]

    async def caption_analytics(self) -> dict[str, Any]:
        body = await self._request("GET", "/caption-analytics")
        return body["data"]
