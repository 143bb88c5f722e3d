"""
crudsync — list + detail + save + delete state for REST collections.

Components:
  actions   — signal constructors and Effects for one endpoint
  reducer   — (state, action) → state  (pure, deterministic)
  adapters  — transport that performs the actual HTTP call
  store     — serializing host that applies actions and runs Effects
"""

from crudsync.actions import CrudActions, Effect
from crudsync.adapters import HttpxAdapter
from crudsync.errors import ApplicationFailure, CrudSyncError, NetworkFailure, TransportFailure
from crudsync.models import ResourceSettings
from crudsync.reducer import CrudReducer, create_crud_reducer, initial_state, replay
from crudsync.store import Store, combine_reducers
from crudsync.types import Action, ActionTypes, DeleteState, SaveState, TransportRequest, ViewState

__version__ = "0.1.0"

__all__ = [
    "CrudActions",
    "Effect",
    "HttpxAdapter",
    "CrudReducer",
    "create_crud_reducer",
    "initial_state",
    "replay",
    "Store",
    "combine_reducers",
    "ResourceSettings",
    "Action",
    "ActionTypes",
    "ViewState",
    "SaveState",
    "DeleteState",
    "TransportRequest",
    "CrudSyncError",
    "TransportFailure",
    "NetworkFailure",
    "ApplicationFailure",
]
