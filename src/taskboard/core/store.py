# src/taskboard/core/store.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .state import BoardState, initial_state

logger = logging.getLogger(__name__)

Listener = Callable[[BoardState], None]
Transition = Callable[..., BoardState]


class BoardStore:
    """
    Holds the current BoardState and notifies listeners on change.

    Only the event-loop thread mutates the store, so no locking is done.
    """

    def __init__(self, state: BoardState | None = None) -> None:
        self._state = state if state is not None else initial_state()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> BoardState:
        return self._state

    def apply(self, transition: Transition, *args: Any, **kwargs: Any) -> BoardState:
        """Run a pure transition against the current state and publish the result."""
        new_state = transition(self._state, *args, **kwargs)
        if new_state == self._state:
            return self._state
        self._state = new_state
        self._notify()
        return new_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("Store listener failed")
