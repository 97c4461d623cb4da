"""
Client-side session state.

The UI layer owns a ``SessionChannel`` and hands it to whatever needs to know
who is signed in. Sign-in/sign-out is published on the channel; widgets
subscribe instead of polling a global "current user".
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import structlog

log = structlog.get_logger()


@dataclass(frozen=True)
class ClientSession:
    access_token: str
    user_id: str
    email: str | None = None


Listener = Callable[[ClientSession | None], None]


class SessionChannel:
    def __init__(self, initial: ClientSession | None = None):
        self._current = initial
        self._listeners: list[Listener] = []

    @property
    def current(self) -> ClientSession | None:
        return self._current

    @property
    def is_signed_in(self) -> bool:
        return self._current is not None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, session: ClientSession | None) -> None:
        self._current = session
        for listener in list(self._listeners):
            try:
                listener(session)
            except Exception:
                # one broken subscriber must not keep the others stale
                log.exception("session_listener_failed")

    def sign_in(self, session: ClientSession) -> None:
        self.publish(session)

    def sign_out(self) -> None:
        self.publish(None)
