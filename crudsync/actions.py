"""
crudsync — Action Factory

Constructors for every signal of one resource, and Effects that wrap a single
transport call so that request, success and failure each emit the right
signal.

Constructors are pure. Effects never raise: every transport outcome, including
a misbehaving adapter, ends up as exactly one terminal action.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from functools import partial
from typing import Any

from crudsync import config
from crudsync.adapters import HttpxAdapter
from crudsync.errors import TransportFailure
from crudsync.models import ResourceSettings
from crudsync.reducer import CrudReducer, create_crud_reducer
from crudsync.types import (
    CREATE,
    DELETE,
    READ,
    UPDATE,
    Action,
    ActionTypes,
    Adapter,
    Dispatch,
    TransportRequest,
)

logger = logging.getLogger(__name__)

NO_OUTCOME_MESSAGE = "Transport reported no outcome"


# ---------------------------------------------------------------------------
# Effect
# ---------------------------------------------------------------------------


class Effect:
    """
    Deferred unit of work for one life-cycle.

    effect(dispatch) dispatches the start action right away, before any IO,
    and returns an awaitable. Awaiting it makes one adapter call and
    dispatches exactly one terminal action, which it also returns.
    """

    def __init__(
        self,
        adapter: Adapter,
        request: TransportRequest,
        start: Action,
        on_success: Callable[[Any], Action],
        on_failure: Callable[[Any, str], Action],
    ) -> None:
        self.adapter = adapter
        self.request = request
        self.start = start
        self._on_success = on_success
        self._on_failure = on_failure

    def __call__(self, dispatch: Dispatch) -> Awaitable[Action]:
        dispatch(self.start)
        return self._run(dispatch)

    def __repr__(self) -> str:  # pragma: no cover
        return f"Effect({self.start.type}, {self.request.method} {self.request.url})"

    async def _run(self, dispatch: Dispatch) -> Action:
        terminal = await self._outcome()
        dispatch(terminal)
        return terminal

    async def _outcome(self) -> Action:
        # (succeeded, payload, error message); only the first report counts
        outcomes: list[tuple[bool, Any, str]] = []

        def record(succeeded: bool, payload: Any, error: Any = None) -> None:
            if outcomes:
                logger.warning(
                    "Adapter reported more than one outcome for %s %s; keeping the first",
                    self.request.method,
                    self.request.url,
                )
                return
            message = str(error) if error else config.settings.NETWORK_ERROR_MESSAGE
            outcomes.append((succeeded, payload, message))

        try:
            await self.adapter(
                self.request,
                lambda data: record(True, data),
                lambda raw_data, error: record(False, raw_data, error),
            )
        except TransportFailure as failure:
            record(False, failure.raw_data, failure.message)
        except Exception as e:
            logger.exception("Adapter raised for %s %s", self.request.method, self.request.url)
            record(False, None, str(e))

        if not outcomes:
            logger.warning("Adapter returned without an outcome for %s %s", self.request.method, self.request.url)
            return self._on_failure(None, NO_OUTCOME_MESSAGE)

        succeeded, payload, message = outcomes[0]
        if not succeeded:
            return self._on_failure(payload, message)

        try:
            return self._on_success(payload)
        except Exception as e:
            logger.exception("Transforming the response of %s %s failed", self.request.method, self.request.url)
            return self._on_failure(payload, str(e) or type(e).__name__)


# ---------------------------------------------------------------------------
# Action factory
# ---------------------------------------------------------------------------


class CrudActions:
    """
    Action factory for one collection endpoint.

    Usage:
        widgets = CrudActions("https://api.example.com/widgets", "WIDGET")
        store = Store(widgets.create_reducer())
        await store.dispatch(widgets.fetch_list({"owner": 1}))
    """

    def __init__(
        self,
        url: str,
        name: str,
        settings: ResourceSettings | None = None,
        *,
        adapter: Adapter | None = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.name = name
        self.settings = settings or ResourceSettings()
        self.adapter = adapter or HttpxAdapter()
        self.action_types = ActionTypes.for_resource(name, self.settings.plural, self.settings.reset_action_type)

    @property
    def primary_key(self) -> str:
        return self.settings.primary_key

    def create_reducer(self) -> CrudReducer:
        """The reducer matching this factory's signals and settings."""
        return create_crud_reducer(
            self.action_types,
            primary_key=self.settings.primary_key,
            available_operations=self.settings.available_operations,
            merge_on_write=self.settings.merge_on_write,
            initial_data=self.settings.initial_data,
        )

    # -- helpers -----------------------------------------------------------

    def _headers(self) -> dict[str, Any]:
        """Static headers are copied; a callable is evaluated on every call."""
        headers = self.settings.headers
        if callable(headers):
            return dict(headers() or {})
        return dict(headers)

    def _item_url(self, id: Any) -> str:
        return f"{self.url}/{id}"

    def _request(self, url: str, method: str, params: Any = None) -> TransportRequest:
        return TransportRequest(
            url=url,
            method=method,
            params=params,
            json=self.settings.json_body,
            headers=self._headers(),
            response_type=self.settings.response_type,
        )

    # -- reset -------------------------------------------------------------

    def reset_all(self) -> Action:
        return Action(type=self.action_types.reset_all)

    # -- list --------------------------------------------------------------

    def request_list(self, params: Any = None) -> Action:
        return Action(type=self.action_types.request, params=params)

    def receive_list(self, params: Any, data: Any) -> Action:
        transform = self.settings.list_transform
        return Action(
            type=self.action_types.receive,
            params=params,
            data=transform(data) if transform else data,
        )

    def receive_list_error(self, params: Any, raw_data: Any, error: str) -> Action:
        return Action(type=self.action_types.receive_error, params=params, error=error, raw_data=raw_data)

    def fetch_list(self, params: Mapping[str, Any] | None = None) -> Effect:
        return Effect(
            self.adapter,
            self._request(self.url, READ, params),
            start=self.request_list(params),
            on_success=partial(self.receive_list, params),
            on_failure=partial(self.receive_list_error, params),
        )

    # -- single item -------------------------------------------------------

    def request_one(self, id: Any) -> Action:
        return Action(type=self.action_types.request_one, id=id)

    def receive_one(self, id: Any, data: Any) -> Action:
        transform = self.settings.item_transform
        return Action(
            type=self.action_types.receive_one,
            id=id,
            data=transform(data) if transform else data,
        )

    def receive_one_error(self, id: Any, raw_data: Any, error: str) -> Action:
        return Action(type=self.action_types.receive_one_error, id=id, error=error, raw_data=raw_data)

    def fetch_one(self, id: Any) -> Effect:
        return Effect(
            self.adapter,
            self._request(self._item_url(id), READ),
            start=self.request_one(id),
            on_success=partial(self.receive_one, id),
            on_failure=partial(self.receive_one_error, id),
        )

    # -- create / update ---------------------------------------------------

    def saving(self, id: Any = None) -> Action:
        return Action(type=self.action_types.saving, id=id)

    def saved(self, id: Any, data: Any) -> Action:
        return Action(type=self.action_types.saved, id=id, data=data)

    def save_error(self, id: Any, raw_data: Any, error: str) -> Action:
        return Action(type=self.action_types.save_error, id=id, error=error, raw_data=raw_data)

    def save(self, data: Mapping[str, Any], id: Any = None, method: str | None = None) -> Effect:
        """
        Create (no id) or update (id given) an item.

        With an id, the body is a copy of data carrying the id under the
        primary key; the caller's mapping is left untouched. method overrides
        the default of "update"/"create" (e.g. "patch").
        """
        body = dict(data)
        if id is not None:
            body[self.primary_key] = id
            url = self._item_url(id)
        else:
            url = self.url

        return Effect(
            self.adapter,
            self._request(url, method or (UPDATE if id is not None else CREATE), body),
            start=self.saving(id),
            on_success=partial(self.saved, id),
            on_failure=partial(self.save_error, id),
        )

    # -- delete ------------------------------------------------------------

    def deleting(self, id: Any) -> Action:
        return Action(type=self.action_types.deleting, id=id)

    def deleted(self, id: Any, data: Any = None) -> Action:
        return Action(type=self.action_types.deleted, id=id, data=data)

    def delete_error(self, id: Any, raw_data: Any, error: str) -> Action:
        return Action(type=self.action_types.delete_error, id=id, error=error, raw_data=raw_data)

    def delete(self, id: Any) -> Effect:
        return Effect(
            self.adapter,
            self._request(self._item_url(id), DELETE),
            start=self.deleting(id),
            on_success=partial(self.deleted, id),
            on_failure=partial(self.delete_error, id),
        )
