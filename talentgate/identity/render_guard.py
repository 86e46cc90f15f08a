"""
===============================================================================
CRC CARD — identity/render_guard.py
===============================================================================

Class: RenderGuard

Responsibilities:
    - Observe an AuthContext and re-evaluate on every state change.
    - Output children (authorized), fallback or None (denied), None (resolving).
    - Drive the LoadingIndicator: start() while resolving, stop() otherwise.

Collaborators:
    - identity.auth_state.AuthContext (injected, never mutated here)
    - identity.access_policy.RenderFallbackOnDeny (decision + lazy output)
    - identity.loading.LoadingIndicator (injected)

Invariants:
    - Children are never produced while is_loading is true.
    - The indicator is only forwarded to when is_loading changes, so repeated
      evaluation of the same state never flips it.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from .access_policy import RenderFallbackOnDeny
from .auth_state import AuthContext, AuthState
from .loading import LoadingIndicator
from .roles import Role

T = TypeVar("T")

_UNSET = object()


class RenderGuard(Generic[T]):
    def __init__(
        self,
        context: AuthContext,
        indicator: LoadingIndicator,
        children: "T | Callable[[], T]",
        *,
        fallback: "T | Callable[[], T] | None" = None,
        required_role: Role | None = None,
        on_render: Callable[["T | None"], None] | None = None,
    ) -> None:
        self._context = context
        self._indicator = indicator
        self._children = children
        self._policy: RenderFallbackOnDeny[T] = RenderFallbackOnDeny(
            required_role, fallback
        )
        self._on_render = on_render
        self._unsubscribe: Callable[[], None] | None = None
        self._last_loading: Any = _UNSET
        self.output: "T | None" = None

    @property
    def required_role(self) -> Role | None:
        return self._policy.required_role

    @property
    def is_mounted(self) -> bool:
        return self._unsubscribe is not None

    def mount(self) -> "T | None":
        """Subscribe to the context and evaluate the current state once."""
        if self._unsubscribe is None:
            self._unsubscribe = self._context.subscribe(self.evaluate)
        return self.evaluate(self._context.state)

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def render(self) -> "T | None":
        return self.evaluate(self._context.state)

    def evaluate(self, state: AuthState) -> "T | None":
        self._sync_indicator(state.is_loading)
        self.output = self._policy.select(state, self._children)
        if self._on_render is not None:
            self._on_render(self.output)
        return self.output

    def _sync_indicator(self, is_loading: bool) -> None:
        if self._last_loading == is_loading:
            return
        self._last_loading = is_loading
        if is_loading:
            self._indicator.start()
        else:
            self._indicator.stop()
