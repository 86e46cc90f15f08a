"""
Process-wide loading indicator controller.

start()/stop() are fire-and-forget and idempotent: repeated calls in the same
direction do not notify listeners again.
"""

from __future__ import annotations

from threading import Lock
from typing import Callable

LoadingListener = Callable[[bool], None]


class LoadingIndicator:
    def __init__(self) -> None:
        self._lock = Lock()
        self._active = False
        self._listeners: list[LoadingListener] = []

    @property
    def is_active(self) -> bool:
        return self._active

    def add_listener(self, listener: LoadingListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def start(self) -> None:
        self._switch(True)

    def stop(self) -> None:
        self._switch(False)

    def _switch(self, active: bool) -> None:
        with self._lock:
            if self._active == active:
                return
            self._active = active
            listeners = list(self._listeners)
        for listener in listeners:
            listener(active)
