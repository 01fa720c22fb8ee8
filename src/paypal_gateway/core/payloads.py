"""
Helpers for constructing the bodies and headers sent to the PayPal REST API.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any, Dict, Iterable, Mapping, Optional
from urllib.parse import urlencode

from .errors import ValidationError

__all__ = [
    "build_customer_token_body",
    "build_terminate_form",
    "build_token_form",
    "find_approval_link",
    "normalize_payload",
    "order_headers",
]

_APPROVAL_RELATIONS = ("approve", "payer-action")


def build_token_form() -> str:
    """URL-encoded body of the client-credentials token request."""
    return urlencode(
        {
            "grant_type": "client_credentials",
            "ignoreCache": "true",
            "return_authn_schemes": "true",
            "return_client_metadata": "true",
            "return_unconsented_scopes": "true",
        }
    )


def build_terminate_form(access_token: str) -> str:
    return urlencode({"token": access_token, "token_type_hint": "ACCESS_TOKEN"})


def build_customer_token_body(customer_id: Any) -> Dict[str, Any]:
    return {"customer_id": customer_id}


def order_headers(request_id: str) -> Dict[str, str]:
    """
    Headers shared by order creation and capture. ``PayPal-Request-Id`` makes
    a retried call return the original result instead of a duplicate order.
    """
    return {
        "Content-Type": "application/json",
        "Prefer": "return=representation",
        "PayPal-Request-Id": request_id,
    }


def find_approval_link(links: Optional[Iterable[Any]]) -> str:
    """
    Return the href the buyer must visit to approve the order, or ``""``.

    The link list is searched by relation; its order is not guaranteed.
    """
    if not isinstance(links, (list, tuple)):
        return ""
    candidates = [link for link in links if isinstance(link, Mapping)]
    for relation in _APPROVAL_RELATIONS:
        for link in candidates:
            if link.get("rel") == relation and link.get("href"):
                return str(link["href"])
    return ""


def _to_plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: _to_plain(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if hasattr(value, "__dict__") and not isinstance(value, type):
        return {
            key: _to_plain(item)
            for key, item in vars(value).items()
            if not key.startswith("_")
        }
    return value


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are accepted by the json module but are not JSON.
    raise ValidationError(f"The string parsed, is not a valid json string: {name} is not allowed.")


def normalize_payload(payload: Any) -> Dict[str, Any]:
    """
    Turn a mapping, a record object (dataclass or plain attributes) or a
    JSON-encoded object into the mapping sent as the order body.
    """
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValidationError("The json bytes are not valid UTF-8.") from exc
    if isinstance(payload, str):
        try:
            decoded = json.loads(payload, parse_constant=_reject_constant)
        except json.JSONDecodeError as exc:
            raise ValidationError("The string parsed, is not a valid json string.") from exc
        if not isinstance(decoded, dict):
            raise ValidationError("The json string must encode an object.")
        return decoded

    if isinstance(payload, (list, tuple)) or payload is None:
        raise ValidationError(
            f"Order payload must be a mapping, a record or a json string, got {type(payload).__name__}"
        )

    plain = _to_plain(payload)
    if not isinstance(plain, dict):
        raise ValidationError(
            f"Order payload must be a mapping, a record or a json string, got {type(payload).__name__}"
        )
    return plain
