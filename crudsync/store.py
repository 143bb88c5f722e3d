"""
crudsync — Store

Small host around the pure reducers. Applies actions one at a time in
delivery order, runs Effects, and tells subscribers about every applied
action.

This is where the reducer meets the outside world. The reducer is pure.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from crudsync.types import Action

logger = logging.getLogger(__name__)

INIT_ACTION = Action(type="@@crudsync/INIT")

Reducer = Callable[[Any, Any], Any]
Listener = Callable[[Any, Any], None]


class Store:
    """
    Usage:
        store = Store(combine_reducers(widgets=widgets.create_reducer()))
        await store.dispatch(widgets.fetch_list())
        store.state["widgets"].data
    """

    def __init__(self, reducer: Reducer, state: Any = None) -> None:
        self._reducer = reducer
        self._listeners: list[Listener] = []
        self.state = reducer(state, INIT_ACTION)

    def dispatch(self, action: Any) -> Any:
        """
        Apply an action, or run an Effect.

        Effects (any callable) are called with this dispatch and their result,
        an awaitable, is returned. Everything else goes through the reducer
        and is returned as is.
        """
        if callable(action):
            return action(self.dispatch)

        logger.debug("dispatch %s", getattr(action, "type", None))
        self.state = self._reducer(self.state, action)
        for listener in list(self._listeners):
            listener(self.state, action)
        return action

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener(state, action); returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


def combine_reducers(**reducers: Reducer) -> Callable[[Mapping[str, Any] | None, Any], dict[str, Any]]:
    """
    One reducer per key. Every action is offered to every slice, which is how
    a single reset action clears all resources at once.

    When no slice changes, the previous mapping is returned unchanged.
    """
    if not reducers:
        raise ValueError("combine_reducers needs at least one reducer")

    def combined(state: Mapping[str, Any] | None, action: Any) -> dict[str, Any]:
        previous = state or {}
        changed = state is None
        next_state: dict[str, Any] = {}
        for key, reducer in reducers.items():
            before = previous.get(key)
            after = reducer(before, action)
            next_state[key] = after
            if after is not before:
                changed = True
        return next_state if changed else state

    return combined
