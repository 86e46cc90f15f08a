"""
===============================================================================
CRC CARD — identity/auth_state.py
===============================================================================

Module:
    AuthState + AuthContext (owned, observable authentication state)

Responsibilities:
    - AuthState: immutable {is_authenticated, is_loading, user_role}.
    - AuthContext: sole mutator of the current state and session.
    - Lifecycle: initialize() -> refresh()/sign_in()/sign_out() -> teardown().
    - Notify subscribers after each state change.

Collaborators:
    - SessionSource: resolves/ends the session (e.g. clients.PortalSessionSource).
    - identity.render_guard.RenderGuard: subscriber.

Constraints:
    - A lock serializes state swaps; callbacks run outside the lock.
    - Subscribers receive the new state; they never mutate the context.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from threading import RLock
from typing import Callable, Protocol

from ..crosscutting.logger import logger
from .roles import Role
from .sessions import Session

Listener = Callable[["AuthState"], None]


@dataclass(frozen=True, slots=True)
class AuthState:
    is_authenticated: bool = False
    is_loading: bool = True
    user_role: Role | None = None

    @classmethod
    def resolving(cls) -> "AuthState":
        return cls(is_authenticated=False, is_loading=True, user_role=None)

    @classmethod
    def signed_out(cls) -> "AuthState":
        return cls(is_authenticated=False, is_loading=False, user_role=None)

    @classmethod
    def from_session(cls, session: Session | None) -> "AuthState":
        if session is None:
            return cls.signed_out()
        return cls(is_authenticated=True, is_loading=False, user_role=session.role)


class SessionSource(Protocol):
    """Where the context gets its session from."""

    def current_session(self) -> Session | None: ...

    def sign_out(self) -> None: ...


class AuthContext:
    """Owned auth state passed explicitly to the gates that observe it."""

    def __init__(self, source: SessionSource | None = None) -> None:
        self._source = source
        self._lock = RLock()
        self._state = AuthState.resolving()
        self._session: Session | None = None
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def session(self) -> Session | None:
        return self._session

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns the matching unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def initialize(self) -> AuthState:
        """Enter the loading state, then resolve the session from the source."""
        self._set(AuthState.resolving(), self._session)
        return self.refresh()

    def refresh(self) -> AuthState:
        session: Session | None = None
        if self._source is not None:
            try:
                session = self._source.current_session()
            except Exception as exc:
                logger.warning(
                    "session refresh failed",
                    extra={"error_type": type(exc).__name__},
                )
                session = None
        return self._set(AuthState.from_session(session), session)

    def sign_in(self, session: Session) -> AuthState:
        return self._set(AuthState.from_session(session), session)

    def sign_out(self) -> AuthState:
        """End the session locally even when the source fails to end it."""
        try:
            if self._source is not None:
                self._source.sign_out()
        finally:
            self._set(AuthState.signed_out(), None)
        return self._state

    def teardown(self) -> None:
        """Return to the initial (resolving) state, tell subscribers, drop them."""
        with self._lock:
            changed = self._state != AuthState.resolving() or self._session is not None
            listeners = list(self._listeners) if changed else []
            self._listeners.clear()
            self._state = AuthState.resolving()
            self._session = None

        for listener in listeners:
            listener(AuthState.resolving())

    # ------------------------------------------------------------------
    def _set(self, state: AuthState, session: Session | None) -> AuthState:
        with self._lock:
            changed = state != self._state or session != self._session
            self._state = state
            self._session = session
            listeners = list(self._listeners) if changed else []

        for listener in listeners:
            listener(state)
        return state
