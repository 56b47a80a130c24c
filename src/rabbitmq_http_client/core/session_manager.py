# src/rabbitmq_http_client/core/session_manager.py
"""
Thread-local requests.Session management for the blocking Client.

``requests.Session`` is not documented as thread-safe, so every thread that
uses a Client gets its own session (and connection pool). A session supplied
by the caller is the exception: it is shared as-is and its lifecycle stays
with the caller.
"""
import logging
import threading
import weakref
from typing import Callable, Optional, Set

import requests

logger = logging.getLogger(__name__)


class ThreadSafeSessionManager:
    """
    Hands out one requests.Session per thread.

    Example:
        >>> manager = ThreadSafeSessionManager(session_factory)
        >>> session = manager.get_session()
        >>> manager.close_all()
    """

    def __init__(
        self,
        session_factory: Callable[[], requests.Session],
        shared_session: Optional[requests.Session] = None,
    ):
        """
        Args:
            session_factory: Creates and configures a new Session
            shared_session: Caller-owned session used by every thread instead
        """
        self._session_factory = session_factory
        self._shared_session = shared_session
        self._local = threading.local()
        self._all_sessions: Set[weakref.ref] = set()
        self._sessions_lock = threading.Lock()
        self._closed = False

    @property
    def owns_sessions(self) -> bool:
        return self._shared_session is None

    def get_session(self) -> requests.Session:
        """Return the current thread's session, creating it on first use."""
        if self._shared_session is not None:
            return self._shared_session

        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._session_factory()
            self._local.session = session
            with self._sessions_lock:
                self._all_sessions.add(weakref.ref(session, self._discard_ref))
        return session

    def _discard_ref(self, ref: weakref.ref) -> None:
        with self._sessions_lock:
            self._all_sessions.discard(ref)

    def close_all(self) -> None:
        """
        Close every session this manager created. Safe to call more than once.

        A caller-supplied session is left open.
        """
        if self._closed:
            return
        self._closed = True

        self._local.session = None
        with self._sessions_lock:
            refs = list(self._all_sessions)
            self._all_sessions.clear()

        for ref in refs:
            session = ref()
            if session is None:
                continue
            try:
                session.close()
            except Exception as exc:
                logger.debug("Failed to close session: %s", exc)

    def get_active_sessions_count(self) -> int:
        with self._sessions_lock:
            return sum(1 for ref in self._all_sessions if ref() is not None)
