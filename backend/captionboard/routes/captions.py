from __future__ import annotations
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from captionboard.config import settings
from captionboard.db import get_session
from captionboard.auth_deps import get_principal, get_optional_principal
from captionboard.schemas.caption import CaptionPage, LikeResult
from captionboard.schemas.common import Envelope
from captionboard.security import Principal
from captionboard.services.likes import like_caption
from captionboard.services.listing import list_captions

router = APIRouter(prefix="/captions", tags=["captions"])

@router.get("", response_model=Envelope[CaptionPage])
async def get_captions(
    limit: int = Query(default=settings.default_page_limit),
    offset: int = Query(default=0),
    sort: str = Query(default="newest", description="newest | oldest | most_liked | random"),
    session: AsyncSession = Depends(get_session),
    principal: Principal | None = Depends(get_optional_principal),
):
    page = await list_captions(
        session,
        sort=sort,
        limit=limit,
        offset=offset,
        voter_id=principal.id if principal else None,
    )
    return Envelope(data=page)

@router.post("/{caption_id}/like", response_model=Envelope[LikeResult])
async def like(
    caption_id: UUID,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    return Envelope(data=await like_caption(session, caption_id, principal.id))
