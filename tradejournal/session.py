"""Explicit session provider.

Holds the current authenticated session and notifies listeners when it
changes. The provider is created and closed by its owner; there is no
module-level session state.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

log = logging.getLogger(__name__)


__all__ = [
    "Session",
    "SessionListener",
    "SessionProvider",
]


@dataclass(frozen=True)
class Session:
    """Identity used to scope which trades a caller may see."""
    user_id: str
    access_token: str
    expires_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        current = now or datetime.now(timezone.utc)
        return current >= self.expires_at


SessionListener = Callable[[Session | None], None]


class SessionProvider:
    """
    Owner of the current session and its change listeners.

    Listeners are called synchronously, in subscription order, whenever the
    session changes. Exceptions in a listener are logged and don't prevent
    other listeners from running.

    Example:
        provider = SessionProvider()
        unsubscribe = provider.subscribe(on_change)
        provider.set_session(Session("user-1", "token"))
        unsubscribe()
        provider.close()
    """

    def __init__(self, session: Session | None = None):
        self._session = session
        self._listeners: list[SessionListener] = []
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def get_current_session(self) -> Session | None:
        """Return the current session, or None if signed out or expired."""
        session = self._session
        if session is not None and session.is_expired():
            return None
        return session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register *listener* and return a callable that removes it again."""
        with self._lock:
            self._ensure_open()
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def set_session(self, session: Session | None) -> None:
        """Replace the current session and notify listeners if it changed."""
        with self._lock:
            self._ensure_open()
            if session == self._session:
                return
            self._session = session
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(session)
            except Exception:
                log.error(
                    "Session listener %s failed",
                    getattr(listener, "__name__", repr(listener)),
                    exc_info=True,
                )

    def clear(self) -> None:
        """Sign out: drop the current session and notify listeners."""
        self.set_session(None)

    def close(self) -> None:
        """Release listeners and the session. The provider can't be reused."""
        with self._lock:
            self._listeners.clear()
            self._session = None
            self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("SessionProvider is closed")
