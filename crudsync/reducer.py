"""
crudsync — Reducer

Pure function: (state, action) → state
No side effects. No IO. Deterministic.

create_crud_reducer() decides once, at construction time, what the initial
state is and which handlers exist. Save/delete handlers are only installed
when the resource allows those operations; anything without a handler is an
identity transition, so many resource reducers can share one action channel.

Merge mode folds successful saves and deletes into the previously fetched
`data` list by primary key instead of leaving the list untouched.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from functools import partial
from types import MappingProxyType
from typing import Any

from crudsync.types import (
    Action,
    ActionTypes,
    DeleteState,
    SaveState,
    ViewState,
    can_delete,
    can_save,
    parse_operations,
)

Handler = Callable[[ViewState, Action], ViewState]

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def initial_state(
    available_operations: str = "CRUD",
    initial_data: Iterable[Any] | None = None,
) -> ViewState:
    """
    The state a resource starts in (and returns to on reset).
    data is a tuple so the shared initial state cannot be mutated through a view.
    Write concerns are only present when the matching operations are enabled.
    """
    operations = parse_operations(available_operations)
    return ViewState(
        data=tuple(initial_data) if initial_data is not None else (),
        save=SaveState() if can_save(operations) else None,
        delete=DeleteState() if can_delete(operations) else None,
    )


class CrudReducer:
    """
    Callable reducer for one resource.

    reducer(None, action) starts from initial_state. The reset action returns
    initial_state itself, whatever the current state is.

    Actions are read through their `type` attribute (Action or any object
    shaped like it). Anything without one, plain mappings included, is an
    identity transition.
    """

    def __init__(self, initial: ViewState, handlers: Mapping[str, Handler], reset_type: str) -> None:
        self.initial_state = initial
        self.handlers: Mapping[str, Handler] = MappingProxyType(dict(handlers))
        self.reset_type = reset_type

    def __call__(self, state: ViewState | None, action: Any) -> ViewState:
        if state is None:
            state = self.initial_state

        action_type = getattr(action, "type", None)
        if not action_type:
            return state
        if action_type == self.reset_type:
            return self.initial_state

        handler = self.handlers.get(action_type)
        if handler is None:
            return state
        return handler(state, action)

    def __repr__(self) -> str:  # pragma: no cover
        return f"CrudReducer(handlers={sorted(self.handlers)!r}, reset_type={self.reset_type!r})"


def create_crud_reducer(
    action_types: ActionTypes,
    *,
    primary_key: str = "id",
    available_operations: str = "CRUD",
    merge_on_write: bool = False,
    initial_data: Iterable[Any] | None = None,
) -> CrudReducer:
    """
    Build the reducer for one resource.

    action_types must be the instance the resource's action factory emits,
    so both sides agree on the literal kinds.
    """
    operations = parse_operations(available_operations)
    initial = initial_state(operations, initial_data)

    handlers: dict[str, Handler] = {
        action_types.request: _handle_request,
        action_types.receive: _handle_receive,
        action_types.receive_error: _handle_receive_error,
        action_types.request_one: _handle_request_one,
        action_types.receive_one: _handle_receive_one,
        action_types.receive_one_error: _handle_receive_one_error,
    }

    if can_save(operations):
        handlers[action_types.saving] = _handle_saving
        handlers[action_types.saved] = (
            partial(_handle_saved_merge, primary_key=primary_key) if merge_on_write else _handle_saved
        )
        handlers[action_types.save_error] = _handle_save_error

    if can_delete(operations):
        handlers[action_types.deleting] = _handle_deleting
        handlers[action_types.deleted] = (
            partial(_handle_deleted_merge, primary_key=primary_key) if merge_on_write else _handle_deleted
        )
        handlers[action_types.delete_error] = _handle_delete_error

    return CrudReducer(initial, handlers, action_types.reset_all)


def replay(reducer: Callable[[Any, Any], Any], actions: Iterable[Any], state: Any = None) -> Any:
    """
    Fold a sequence of actions through a reducer.
    replay(r, [a1, a2], s) == r(r(s, a1), a2)
    Without a starting state the reducer's own initial state is used.
    """
    if state is None:
        state = reducer(None, None)
    for action in actions:
        state = reducer(state, action)
    return state


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _same_key(item: Any, primary_key: str, key: Any) -> bool:
    """Ids coming from urls are strings while payload ids may be ints, so compare both ways."""
    if not isinstance(item, Mapping) or primary_key not in item:
        return False
    value = item[primary_key]
    return value == key or str(value) == str(key)


def _is_list(data: Any) -> bool:
    return isinstance(data, (list, tuple))


def _save_of(state: ViewState) -> SaveState:
    return state.save if state.save is not None else SaveState()


def _delete_of(state: ViewState) -> DeleteState:
    return state.delete if state.delete is not None else DeleteState()


# ---------------------------------------------------------------------------
# List handlers
# ---------------------------------------------------------------------------


def _handle_request(state: ViewState, action: Action) -> ViewState:
    return replace(
        state,
        list_loading=True,
        params=action.params,
        data=[],
        list_error=None,
        list_error_data=None,
    )


def _handle_receive(state: ViewState, action: Action) -> ViewState:
    return replace(
        state,
        data=action.data,
        list_loading=False,
        list_error=None,
        list_error_data=None,
    )


def _handle_receive_error(state: ViewState, action: Action) -> ViewState:
    return replace(
        state,
        list_error=action.error,
        list_error_data=action.raw_data,
        list_loading=False,
    )


# ---------------------------------------------------------------------------
# Single item handlers
# ---------------------------------------------------------------------------


def _handle_request_one(state: ViewState, action: Action) -> ViewState:
    # Stale item data must never look like the answer to this request
    return replace(
        state,
        current_id=None,
        current_data=None,
        one_loading=True,
        one_error=None,
        one_error_data=None,
    )


def _handle_receive_one(state: ViewState, action: Action) -> ViewState:
    return replace(
        state,
        current_id=action.id,
        current_data=action.data,
        one_loading=False,
        one_error=None,
        one_error_data=None,
    )


def _handle_receive_one_error(state: ViewState, action: Action) -> ViewState:
    return replace(
        state,
        one_loading=False,
        one_error=action.error,
        one_error_data=action.raw_data,
    )


# ---------------------------------------------------------------------------
# Save handlers
# ---------------------------------------------------------------------------


def _handle_saving(state: ViewState, action: Action) -> ViewState:
    return replace(state, save=SaveState(is_saving=True))


def _handle_saved(state: ViewState, action: Action) -> ViewState:
    return replace(state, save=SaveState(saved_data=action.data))


def _handle_saved_merge(state: ViewState, action: Action, *, primary_key: str) -> ViewState:
    """
    Fold the saved item into data.

    With an id: replace matching elements in place. If nothing matches, data
    is left as is; only saved_data changes. Without an id: append.
    """
    data = state.data
    if _is_list(data):
        if action.id is not None:
            if any(_same_key(item, primary_key, action.id) for item in data):
                data = [action.data if _same_key(item, primary_key, action.id) else item for item in data]
        else:
            data = [*data, action.data]

    return replace(state, data=data, save=SaveState(saved_data=action.data))


def _handle_save_error(state: ViewState, action: Action) -> ViewState:
    return replace(
        state,
        save=replace(
            _save_of(state),
            is_saving=False,
            save_error=action.error,
            save_error_data=action.raw_data,
        ),
    )


# ---------------------------------------------------------------------------
# Delete handlers
# ---------------------------------------------------------------------------


def _handle_deleting(state: ViewState, action: Action) -> ViewState:
    return replace(state, delete=DeleteState(is_deleting=True))


def _handle_deleted(state: ViewState, action: Action) -> ViewState:
    return replace(state, delete=DeleteState())


def _handle_deleted_merge(state: ViewState, action: Action, *, primary_key: str) -> ViewState:
    data = state.data
    if action.id is not None and _is_list(data):
        data = [item for item in data if not _same_key(item, primary_key, action.id)]

    return replace(state, data=data, delete=DeleteState())


def _handle_delete_error(state: ViewState, action: Action) -> ViewState:
    return replace(
        state,
        delete=replace(
            _delete_of(state),
            is_deleting=False,
            delete_error=action.error,
            delete_error_data=action.raw_data,
        ),
    )
