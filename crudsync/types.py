"""
crudsync — Shared Types

Data classes used across the action factory, reducer, adapters and store.
These are the contracts that bind the resource layer together.

- ActionTypes: the literal signal kinds for one resource
- Action: a single immutable signal
- ViewState (+ SaveState, DeleteState): what the reducer produces
- TransportRequest: what the action factory hands to an adapter
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass, field
from typing import Any, Protocol

from crudsync import config

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ERROR_SUFFIX = "_ERROR"

# Logical transport methods
READ = "read"
CREATE = "create"
UPDATE = "update"
PATCH = "patch"
DELETE = "delete"

TRANSPORT_METHODS: set[str] = {READ, CREATE, UPDATE, PATCH, DELETE}
METHODS_WITH_BODY: set[str] = {CREATE, UPDATE, PATCH}

# Letters accepted in available_operations
CRUD_OPERATIONS: frozenset[str] = frozenset("CRUD")

RESPONSE_TYPES: set[str] = {"json", "text", "bytes"}


def parse_operations(value: str) -> str:
    """Normalize an available-operations string ("crud" -> "CRUD"), rejecting unknown letters."""
    value = value.upper()
    if not value:
        raise ValueError("at least one of C, R, U, D is required")
    unknown = set(value) - CRUD_OPERATIONS
    if unknown:
        raise ValueError(f"unknown operations: {''.join(sorted(unknown))}")
    return value


def can_save(operations: str) -> bool:
    return "C" in operations or "U" in operations


def can_delete(operations: str) -> bool:
    return "D" in operations


# ---------------------------------------------------------------------------
# Action vocabulary
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ActionTypes:
    """
    The signal kinds for one resource.

    List kinds use the plural name, everything else the singular. Built once
    by the action factory and handed to the reducer by reference, so both
    always agree on the literals.
    """

    request: str
    receive: str
    receive_error: str
    saving: str
    saved: str
    save_error: str
    request_one: str
    receive_one: str
    receive_one_error: str
    deleting: str
    deleted: str
    delete_error: str
    reset_all: str

    @classmethod
    def for_resource(cls, name: str, plural: str | None = None, reset_all: str | None = None) -> ActionTypes:
        if not name:
            raise ValueError("resource name must not be empty")
        plural = plural or f"{name}S"
        if plural == name:
            raise ValueError(f"plural {plural!r} must differ from the singular name")
        if reset_all is None:
            reset_all = config.settings.RESET_ACTION_TYPE
        if not reset_all:
            raise ValueError("reset action type must not be empty")

        return cls(
            request=f"REQUEST_{plural}",
            receive=f"RECEIVED_{plural}",
            receive_error=f"RECEIVED_{plural}{ERROR_SUFFIX}",
            saving=f"SAVING_{name}",
            saved=f"SAVED_{name}",
            save_error=f"SAVE_{name}{ERROR_SUFFIX}",
            request_one=f"REQUEST_{name}",
            receive_one=f"RECEIVED_{name}",
            receive_one_error=f"RECEIVED_{name}{ERROR_SUFFIX}",
            deleting=f"DELETING_{name}",
            deleted=f"DELETED_{name}",
            delete_error=f"DELETE_{name}{ERROR_SUFFIX}",
            reset_all=reset_all,
        )

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class Action:
    """
    One state-transition signal.

    Only `type` is required; the other fields are filled per kind:
    list kinds carry params, item/save/delete kinds carry id, terminal
    success kinds carry data, error kinds carry error + raw_data.
    """

    type: str
    params: Any = None
    id: Any = None
    data: Any = None
    error: str | None = None
    raw_data: Any = None


# ---------------------------------------------------------------------------
# View state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SaveState:
    is_saving: bool = False
    saved_data: Any = None
    save_error: str | None = None
    save_error_data: Any = None


@dataclass(frozen=True)
class DeleteState:
    is_deleting: bool = False
    delete_error: str | None = None
    delete_error_data: Any = None


@dataclass(frozen=True)
class ViewState:
    """
    The view model for one resource type.

    Never mutated: every delivered action yields a new instance (or the same
    one when nothing applies). `save` and `delete` are None when those
    capabilities are disabled for the resource.
    """

    # List concern
    data: Any = ()
    params: Any = None
    list_loading: bool = False
    list_error: str | None = None
    list_error_data: Any = None

    # Single item concern
    current_id: Any = None
    current_data: Any = None
    one_loading: bool = False
    one_error: str | None = None
    one_error_data: Any = None

    # Write concerns
    save: SaveState | None = None
    delete: DeleteState | None = None

    def to_dict(self) -> dict[str, Any]:
        """Flat mapping of every present field, for logging and serialization."""
        d: dict[str, Any] = {
            "data": self.data,
            "params": self.params,
            "list_loading": self.list_loading,
            "list_error": self.list_error,
            "list_error_data": self.list_error_data,
            "current_id": self.current_id,
            "current_data": self.current_data,
            "one_loading": self.one_loading,
            "one_error": self.one_error,
            "one_error_data": self.one_error_data,
        }
        if self.save is not None:
            d.update(asdict(self.save))
        if self.delete is not None:
            d.update(asdict(self.delete))
        return d


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TransportRequest:
    """Description of one call, produced by the action factory."""

    url: str
    method: str = READ
    params: Any = None
    json: bool = False
    headers: dict[str, Any] = field(default_factory=dict)
    response_type: str = "json"


SuccessCallback = Callable[[Any], None]
FailureCallback = Callable[[Any, str], None]
Dispatch = Callable[[Any], Any]


class Adapter(Protocol):
    """
    Performs one call and reports exactly one outcome.

    Implementations invoke on_success(data) or on_failure(raw_data, message),
    once, before the returned awaitable completes.
    """

    def __call__(
        self,
        request: TransportRequest,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> Awaitable[None]: ...
