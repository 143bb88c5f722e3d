"""HTTP transport adapter backed by httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from crudsync import config
from crudsync.errors import ApplicationFailure, NetworkFailure, TransportFailure
from crudsync.types import (
    CREATE,
    DELETE,
    PATCH,
    READ,
    UPDATE,
    FailureCallback,
    SuccessCallback,
    TransportRequest,
)

logger = logging.getLogger(__name__)

MALFORMED_BODY_MESSAGE = "Malformed response body"

_HTTP_METHODS: dict[str, str] = {
    READ: "GET",
    CREATE: "POST",
    UPDATE: "PUT",
    PATCH: "PATCH",
    DELETE: "DELETE",
}

_BODY_VERBS: set[str] = {"POST", "PUT", "PATCH"}


def http_method(method: str) -> str:
    """Map a logical transport method to an HTTP verb. Raw verbs pass through."""
    verb = _HTTP_METHODS.get(method.lower())
    if verb:
        return verb
    if method.upper() in _HTTP_METHODS.values():
        return method.upper()
    raise ValueError(f"unknown transport method: {method!r}")


class HttpxAdapter:
    """
    Transport adapter for JSON-over-HTTP collection endpoints.

    Pass a shared httpx.AsyncClient to reuse connections (and to plug in
    httpx.MockTransport in tests); without one, each call opens a short-lived
    client with the configured timeout.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, *, timeout: float | None = None):
        self.client = client
        self.timeout = timeout if timeout is not None else config.settings.HTTP_TIMEOUT

    async def __call__(
        self,
        request: TransportRequest,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        """Adapter contract: report exactly one outcome through the callbacks."""
        try:
            payload = await self.perform(request)
        except TransportFailure as failure:
            on_failure(failure.raw_data, failure.message)
            return
        on_success(payload)

    async def perform(self, request: TransportRequest) -> Any:
        """
        Make the call and return the decoded success payload.

        Raises:
            NetworkFailure: no response was received
            ApplicationFailure: non-2xx status, or a 2xx body that does not
                decode as the configured response type
        """
        verb = http_method(request.method)
        kwargs = self._request_kwargs(verb, request)

        logger.debug("%s %s", verb, request.url)
        try:
            if self.client is not None:
                response = await self.client.request(verb, request.url, **kwargs)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(verb, request.url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", verb, request.url, e)
            raise NetworkFailure(config.settings.NETWORK_ERROR_MESSAGE) from e

        logger.debug("%s %s -> %d", verb, request.url, response.status_code)
        return self._decode(response, request.response_type)

    async def aclose(self) -> None:
        """Close the shared client, if any."""
        if self.client is not None:
            await self.client.aclose()

    def _request_kwargs(self, verb: str, request: TransportRequest) -> dict[str, Any]:
        """Body for POST/PUT/PATCH, query string for everything else."""
        kwargs: dict[str, Any] = {"headers": dict(request.headers)}
        params = request.params

        if verb in _BODY_VERBS:
            if params is None:
                pass
            elif request.json:
                kwargs["json"] = params
            elif isinstance(params, (str, bytes)):
                kwargs["content"] = params
            else:
                kwargs["data"] = params
        elif params:
            kwargs["params"] = params

        return kwargs

    def _decode(self, response: httpx.Response, response_type: str) -> Any:
        if response_type == "bytes":
            payload: Any = response.content
        elif response_type == "text":
            payload = response.text
        elif not response.content:
            payload = None
        else:
            try:
                payload = response.json()
            except ValueError:
                if response.is_success:
                    raise ApplicationFailure(MALFORMED_BODY_MESSAGE, response.text, response.status_code)
                # Error pages are often plain text; keep them readable
                payload = response.text

        if not response.is_success:
            message = response.reason_phrase or f"HTTP {response.status_code}"
            raise ApplicationFailure(message, payload, response.status_code)
        return payload
