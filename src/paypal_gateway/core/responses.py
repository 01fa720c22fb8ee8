"""
Decoding of raw API responses and the result envelope returned to callers.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from .errors import TransportError
from .transport import RawResponse

__all__ = [
    "APPROVED",
    "COMPLETED",
    "CREATED",
    "ApiFailure",
    "ApiResponse",
    "ApiResult",
    "ApiSuccess",
    "decode_response",
]

CREATED = "CREATED"
APPROVED = "APPROVED"
COMPLETED = "COMPLETED"

_EXCERPT_LENGTH = 200


@dataclass(frozen=True)
class ApiSuccess:
    status_code: int
    payload: Dict[str, Any]

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default)


@dataclass(frozen=True)
class ApiFailure:
    """
    Error payload returned by the API.

    OAuth endpoints answer with ``error``/``error_description``; the REST
    endpoints with ``name``, ``message`` and a ``details`` list.
    """

    status_code: int
    payload: Dict[str, Any]

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default)

    def first_issue(self) -> Tuple[Optional[str], Optional[str]]:
        details = self.payload.get("details")
        if isinstance(details, list) and details and isinstance(details[0], dict):
            return details[0].get("issue"), details[0].get("description")
        return None, None

    @property
    def code(self) -> Optional[str]:
        if self.payload.get("error"):
            return str(self.payload["error"])
        if self.payload.get("name"):
            return str(self.payload["name"])
        return self.first_issue()[0]

    @property
    def description(self) -> Optional[str]:
        if self.payload.get("error_description"):
            return str(self.payload["error_description"])
        issue_description = self.first_issue()[1]
        if issue_description:
            return issue_description
        message = self.payload.get("message")
        return str(message) if message else None


ApiResponse = Union[ApiSuccess, ApiFailure]


def _excerpt(body: str) -> str:
    body = body.strip()
    if len(body) > _EXCERPT_LENGTH:
        return body[:_EXCERPT_LENGTH] + "..."
    return body


def _is_error_payload(payload: Dict[str, Any]) -> bool:
    if "error" in payload:
        return True
    return "name" in payload and ("message" in payload or "details" in payload)


def decode_response(raw: RawResponse, *, allow_empty: bool = False) -> ApiResponse:
    """
    Decode ``raw`` once into either an :class:`ApiSuccess` or an
    :class:`ApiFailure`. Bodies that are empty, not JSON, or not a JSON object
    raise :class:`TransportError`, except that ``allow_empty`` accepts an empty
    body on a successful status as an empty payload.
    """
    if not raw.body or not raw.body.strip():
        if allow_empty and raw.status_code < 400:
            return ApiSuccess(status_code=raw.status_code, payload={})
        raise TransportError(
            f"Empty response body (HTTP {raw.status_code})",
            status_code=raw.status_code,
        )
    try:
        payload = json.loads(raw.body)
    except json.JSONDecodeError as exc:
        raise TransportError(
            f"Failed to parse JSON response (HTTP {raw.status_code}): {_excerpt(raw.body)}",
            status_code=raw.status_code,
        ) from exc
    if not isinstance(payload, dict):
        raise TransportError(
            f"Expected a JSON object (HTTP {raw.status_code}): {_excerpt(raw.body)}",
            status_code=raw.status_code,
        )

    if raw.status_code >= 400 or _is_error_payload(payload):
        return ApiFailure(status_code=raw.status_code, payload=payload)
    return ApiSuccess(status_code=raw.status_code, payload=payload)


@dataclass(frozen=True)
class ApiResult:
    """Uniform envelope returned by every remote operation of the client."""

    success: bool
    data: Any = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "ApiResult":
        return cls(success=True, data=data, message=message)

    def as_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "data": self.data, "message": self.message}
