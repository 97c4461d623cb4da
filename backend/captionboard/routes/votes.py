from __future__ import annotations
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from captionboard.db import get_session
from captionboard.auth_deps import get_principal, get_optional_principal
from captionboard.schemas.common import Envelope
from captionboard.schemas.vote import VoteCreate, VotePublic, VoteResult, VoteSummary
from captionboard.security import Principal
from captionboard.services.votes import count_votes
from captionboard.services.vote_store import get_vote, submit_vote, vote_rows_for

router = APIRouter(prefix="/vote", tags=["votes"])

@router.post("", response_model=Envelope[VoteResult], response_model_exclude_none=True)
async def cast_vote(
    payload: VoteCreate,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    outcome = await submit_vote(session, payload.caption_id, principal.id, payload.vote_value)
    return Envelope(data=VoteResult(
        action=outcome.action,
        vote=VotePublic.model_validate(outcome.vote),
        previous_vote=outcome.previous_vote,
    ))

@router.get("", response_model=Envelope[VoteSummary])
async def vote_summary(
    caption_id: UUID = Query(...),
    session: AsyncSession = Depends(get_session),
    principal: Principal | None = Depends(get_optional_principal),
):
    counts = count_votes(v for _, v in await vote_rows_for(session, [caption_id]))
    user_vote = None
    if principal is not None:
        mine = await get_vote(session, caption_id, principal.id)
        user_vote = mine.vote_value if mine else None
    return Envelope(data=VoteSummary(
        caption_id=caption_id,
        vote_counts=counts,
        user_vote=user_vote,
        total_votes=counts.total,
    ))
