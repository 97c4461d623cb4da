"""
Voting widget state.

Holds the displayed counts and the viewer's vote for one caption. After the
server accepts a vote, the counts are updated locally with
``apply_vote_change`` (the same bucketing the server uses when it recounts)
rather than refetched. The vote being replaced is the ``previous_vote`` the
server reports, not the widget's cached one.
"""
from __future__ import annotations
from typing import Callable
from uuid import UUID
import structlog
from captionboard.client.api import ApiError, CaptionboardApi
from captionboard.client.session import ClientSession, SessionChannel
from captionboard.schemas.vote import VoteCounts
from captionboard.services.votes import VALID_VOTE_VALUES, apply_vote_change, upvote_ratio

log = structlog.get_logger()

LOGIN_REQUIRED = "Please log in to vote on captions"

Notify = Callable[[str], None]
VoteChanged = Callable[[VoteCounts, int | None], None]


class VotingWidget:
    def __init__(
        self,
        caption_id: UUID | str,
        counts: VoteCounts,
        user_vote: int | None,
        api: CaptionboardApi,
        sessions: SessionChannel,
        notify: Notify,
        on_vote_change: VoteChanged | None = None,
    ):
        self.caption_id = caption_id
        self.counts = counts
        self.user_vote = user_vote
        self.is_voting = False
        self._api = api
        self._notify = notify
        self._on_vote_change = on_vote_change
        self.is_logged_in = sessions.is_signed_in
        self._unsubscribe = sessions.subscribe(self._session_changed)

    def _session_changed(self, session: ClientSession | None) -> None:
        self.is_logged_in = session is not None
        if session is None:
            # the vote shown belonged to the previous user
            self.user_vote = None

    def close(self) -> None:
        self._unsubscribe()

    @property
    def total(self) -> int:
        return self.counts.total

    @property
    def up_percent(self) -> int | None:
        ratio = upvote_ratio(self.counts)
        return None if ratio is None else round(ratio * 100)

    async def vote(self, value: int) -> bool:
        """Submit ``value``; returns True when the server accepted it and local state moved."""
        if not self.is_logged_in:
            self._notify(LOGIN_REQUIRED)
            return False
        if self.is_voting:
            return False
        if value not in VALID_VOTE_VALUES:
            raise ValueError(f"vote value must be one of {VALID_VOTE_VALUES}")

        self.is_voting = True
        try:
            result = await self._api.submit_vote(self.caption_id, value)
        except ApiError as e:
            log.warning("vote_submit_failed", caption_id=str(self.caption_id), error=e.message)
            self._notify(e.message or "Failed to submit vote")
            return False
        finally:
            self.is_voting = False

        # The server knows what it overwrote; the cached user_vote can be stale after a session change
        previous = result.get("previous_vote") if result.get("action") == "updated" else None
        self.counts = apply_vote_change(self.counts, previous, value)
        self.user_vote = value
        if self._on_vote_change:
            self._on_vote_change(self.counts, self.user_vote)
        return True
