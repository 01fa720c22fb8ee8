"""
HTTP transports used by the gateway client.

The client never talks to ``requests`` directly: it hands an
:class:`ApiRequest` to a :class:`Transport` and gets a :class:`RawResponse`
back. Swapping the transport is how callers run the client offline.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import requests

from .errors import TransportError

__all__ = [
    "ApiRequest",
    "RawResponse",
    "ReplayTransport",
    "RequestsTransport",
    "Transport",
]


@dataclass(frozen=True)
class ApiRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    data: Optional[str] = None
    json: Optional[Any] = None
    auth: Optional[Tuple[str, str]] = None
    timeout: Optional[float] = None


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    body: str


class Transport:
    """Sends one :class:`ApiRequest` and returns the undecoded response."""

    def send(self, request: ApiRequest) -> RawResponse:
        raise NotImplementedError


class RequestsTransport(Transport):
    """
    Transport backed by a :class:`requests.Session`.

    Redirects are followed by ``requests``; the deadline comes from the
    request's ``timeout``.
    """

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self.session = session or requests.Session()

    def send(self, request: ApiRequest) -> RawResponse:
        try:
            response = self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.data,
                json=request.json,
                auth=request.auth,
                timeout=request.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(
                f"Request to {request.url} failed: {exc}"
            ) from exc
        return RawResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        self.session.close()


class ReplayTransport(Transport):
    """
    Offline transport that answers with pre-supplied response bodies.

    Bodies are returned in order, as status 200 unless a :class:`RawResponse`
    is given. Every request received is kept in :attr:`requests`.
    """

    def __init__(self, responses: Iterable[Union[str, RawResponse]] = ()) -> None:
        self._responses: deque = deque()
        self.requests: List[ApiRequest] = []
        for response in responses:
            self.queue(response)

    def queue(self, response: Union[str, RawResponse]) -> None:
        if isinstance(response, str):
            response = RawResponse(status_code=200, body=response)
        self._responses.append(response)

    @property
    def pending(self) -> int:
        return len(self._responses)

    def send(self, request: ApiRequest) -> RawResponse:
        self.requests.append(request)
        if not self._responses:
            raise TransportError(
                f"No replay response left for {request.method} {request.url}"
            )
        logging.debug("Replaying canned response for %s %s", request.method, request.url)
        return self._responses.popleft()
