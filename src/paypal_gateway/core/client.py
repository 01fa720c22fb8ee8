"""
Stateful client for the PayPal REST API.

One :class:`GatewayClient` holds the merchant credentials, the current access
token and a single order slot. Every remote operation returns an
:class:`~paypal_gateway.core.responses.ApiResult` or raises a
:class:`~paypal_gateway.core.errors.GatewayError`.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Mapping, Optional, Union

import requests

from .config import Environment, GatewayConfig
from .errors import AuthError, OrderError
from .payloads import (
    build_customer_token_body,
    build_terminate_form,
    build_token_form,
    find_approval_link,
    normalize_payload,
    order_headers,
)
from .responses import (
    APPROVED,
    COMPLETED,
    CREATED,
    ApiFailure,
    ApiResponse,
    ApiResult,
    ApiSuccess,
    decode_response,
)
from .transport import ApiRequest, RequestsTransport, Transport

__all__ = ["GatewayClient"]

TOKEN_PATH = "v1/oauth2/token"
TERMINATE_PATH = "v1/oauth2/token/terminate"
USERINFO_PATH = "v1/identity/oauth2/userinfo?schema=paypalv1.1"
GENERATE_TOKEN_PATH = "v1/identity/generate-token"
ORDERS_PATH = "v2/checkout/orders"

_FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


def _order_failure(response: ApiResponse) -> OrderError:
    details = response.payload.get("details")
    if isinstance(details, list) and details and isinstance(details[0], dict):
        return OrderError(details[0].get("issue"), details[0].get("description"))
    if isinstance(response, ApiFailure):
        return OrderError(response.code, response.description)
    status = response.payload.get("status")
    return OrderError("UNEXPECTED_STATUS", f"Order status is {status!r}")


def _auth_failure(response: ApiResponse, missing: str) -> AuthError:
    if isinstance(response, ApiFailure):
        return AuthError(response.code, response.description)
    return AuthError("invalid_response", f"Response did not contain {missing}")


class GatewayClient:
    """
    Client for the OAuth2, identity and checkout order endpoints.

    Credentials can be passed directly or as a :class:`GatewayConfig`; the
    ``transport`` decides how requests leave the process (a ``requests``
    session by default). Instances share no state, but a single instance must
    not be used from several threads at once.
    """

    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        environment: Union[Environment, str, bool] = Environment.LIVE,
        *,
        config: Optional[GatewayConfig] = None,
        transport: Optional[Transport] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if transport is not None and session is not None:
            raise ValueError("Provide either a transport or a requests session, not both.")
        self.transport = transport or RequestsTransport(session)

        self.access_token = ""
        self.token_type = ""
        self.client_token = ""
        self.payload: Dict[str, Any] = {}
        self.order_id = ""
        self.order_status = ""
        self.approval_link = ""

        if config is not None:
            if client_id or client_secret:
                raise ValueError(
                    "Provide either a GatewayConfig or individual credentials, not both."
                )
            self._apply_config(config)
        else:
            self._apply_config(
                GatewayConfig(
                    client_id=client_id,
                    client_secret=client_secret,
                    environment=environment,
                )
            )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(client_id={self.client_id!r}, "
            f"environment={self.environment.value!r}, order_id={self.order_id!r})"
        )

    def _apply_config(self, config: GatewayConfig) -> None:
        self.config = config
        self.request_id = str(uuid.uuid4())
        logging.debug("Using request id %s", self.request_id)

    def initialize(
        self,
        config: Union[GatewayConfig, Mapping[str, Any], None] = None,
        *,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        environment: Union[Environment, str, bool, None] = None,
    ) -> None:
        """
        Replace credentials and environment and start a new idempotency key.

        ``config`` may be a :class:`GatewayConfig` or a mapping such as
        ``{"client_id": ..., "secret": ..., "testMode": True}``. The access
        token and the order slot are left untouched.
        """
        if config is not None:
            if any(item is not None for item in (client_id, client_secret, environment)):
                raise ValueError(
                    "Provide either a configuration object or individual credentials, not both."
                )
            if not isinstance(config, GatewayConfig):
                config = GatewayConfig.from_options(config)
        else:
            config = GatewayConfig(
                client_id=client_id or "",
                client_secret=client_secret or "",
                environment=Environment.LIVE if environment is None else environment,
            )
        self._apply_config(config)

    @property
    def client_id(self) -> str:
        return self.config.client_id

    @property
    def client_secret(self) -> str:
        return self.config.client_secret

    @property
    def environment(self) -> Environment:
        return self.config.environment

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def version(self) -> str:
        return self.config.version

    def is_configured(self) -> bool:
        return self.config.is_configured

    def regenerate_request_id(self) -> str:
        """Start a new idempotency key for the next create or capture call."""
        self.request_id = str(uuid.uuid4())
        return self.request_id

    def _request(
        self,
        method: str,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        data: Optional[str] = None,
        json_body: Optional[Any] = None,
        basic_auth: bool = False,
        allow_empty: bool = False,
    ) -> ApiResponse:
        url = self.config.url_for(path)
        merged_headers = {
            "Accept": "application/json",
            "User-Agent": f"paypal-gateway/{self.version}",
        }
        auth = None
        if basic_auth:
            auth = (self.client_id, self.client_secret)
        elif self.access_token:
            # PayPal only issues bearer tokens; the scheme is fixed whatever token_type says.
            merged_headers["Authorization"] = f"Bearer {self.access_token}"
        if headers:
            merged_headers.update(headers)

        request = ApiRequest(
            method=method,
            url=url,
            headers=merged_headers,
            data=data,
            json=json_body,
            auth=auth,
            timeout=self.config.timeout_seconds,
        )
        logging.info("%s %s", method, url)
        raw = self.transport.send(request)
        return decode_response(raw, allow_empty=allow_empty)

    def _require_token(self) -> None:
        if not self.access_token:
            raise AuthError("no_token", "Call acquire_token() before this operation")

    def _resolve_order_id(self, order_id: Optional[str]) -> str:
        resolved = (order_id or self.order_id or "").strip()
        if not resolved:
            raise OrderError("MISSING_ORDER_ID", "No order id is known; create an order first")
        return resolved

    # Credentials and session

    def acquire_token(self) -> ApiResult:
        response = self._request(
            "POST",
            TOKEN_PATH,
            headers=_FORM_HEADERS,
            data=build_token_form(),
            basic_auth=True,
        )
        if isinstance(response, ApiSuccess) and response.get("access_token"):
            self.access_token = str(response.get("access_token"))
            self.token_type = str(response.get("token_type") or "Bearer")
            return ApiResult.ok(response.payload, "Access token gotten successfully.")

        logging.warning("Access token request was rejected (HTTP %s)", response.status_code)
        raise _auth_failure(response, "access_token")

    def revoke_token(self) -> ApiResult:
        self._require_token()
        response = self._request(
            "POST",
            TERMINATE_PATH,
            headers=_FORM_HEADERS,
            data=build_terminate_form(self.access_token),
            allow_empty=True,
        )
        if isinstance(response, ApiFailure):
            logging.warning("Access token termination was rejected (HTTP %s)", response.status_code)
            raise AuthError(response.code, response.description)

        self.access_token = ""
        self.token_type = ""
        return ApiResult.ok(None, "Access token terminated successfully.")

    def fetch_account_info(self) -> ApiResult:
        self._require_token()
        response = self._request("GET", USERINFO_PATH)
        if isinstance(response, ApiSuccess) and response.get("user_id"):
            return ApiResult.ok(response.payload, "User info gotten successfully.")
        raise _auth_failure(response, "user_id")

    def generate_customer_token(self, customer_id: Any) -> ApiResult:
        self._require_token()
        response = self._request(
            "POST",
            GENERATE_TOKEN_PATH,
            headers={"Content-Type": "application/json"},
            json_body=build_customer_token_body(customer_id),
        )
        if isinstance(response, ApiSuccess):
            token = response.get("client_token") or response.get("id_token")
            if token:
                self.client_token = str(token)
                return ApiResult.ok(response.payload, "Client token gotten successfully.")
        raise _auth_failure(response, "client_token or id_token")

    # Pending order payload

    def set_payload(self, payload: Any) -> None:
        self.payload = normalize_payload(payload)

    def add_field(self, name: str, value: Any) -> None:
        self.payload[name] = value

    def get_payload(self) -> Dict[str, Any]:
        return dict(self.payload)

    # Order lifecycle

    def create_order(self) -> ApiResult:
        response = self._request(
            "POST",
            ORDERS_PATH,
            headers=order_headers(self.request_id),
            json_body=self.payload,
        )
        if (
            isinstance(response, ApiSuccess)
            and response.get("status") in (CREATED, APPROVED)
            and response.get("id")
        ):
            self.order_id = str(response.get("id"))
            self.order_status = str(response.get("status"))
            self.approval_link = find_approval_link(response.get("links"))
            logging.info("Created order %s (%s)", self.order_id, self.order_status)
            return ApiResult.ok(response.payload, "Order created successfully.")

        logging.warning("Order creation failed (HTTP %s)", response.status_code)
        raise _order_failure(response)

    def get_approval_link(self) -> str:
        return self.approval_link

    def show_order_details(self, order_id: Optional[str] = None) -> ApiResult:
        """
        Fetch an order, the stored one by default.

        The call succeeds whenever the order could be read; its status is part
        of the returned data. With ``require_created_status`` configured, any
        status other than ``CREATED`` raises :class:`OrderError` instead.
        """
        resolved = self._resolve_order_id(order_id)
        response = self._request("GET", f"{ORDERS_PATH}/{resolved}")
        if not (isinstance(response, ApiSuccess) and response.get("id")):
            raise _order_failure(response)

        status = str(response.get("status") or "")
        if resolved == self.order_id:
            self.order_status = status
        if self.config.require_created_status and status != CREATED:
            raise OrderError("UNEXPECTED_STATUS", f"Order {resolved} has status {status!r}")
        return ApiResult.ok(response.payload, "Order details gotten successfully.")

    def capture_order(self, order_id: Optional[str] = None) -> ApiResult:
        resolved = self._resolve_order_id(order_id)
        response = self._request(
            "POST",
            f"{ORDERS_PATH}/{resolved}/capture",
            headers=order_headers(self.request_id),
        )
        if isinstance(response, ApiSuccess) and response.get("status") == COMPLETED:
            if resolved == self.order_id:
                self.order_status = COMPLETED
            logging.info("Captured order %s", resolved)
            return ApiResult.ok(response.payload, "Order captured successfully.")

        logging.warning("Capture of order %s failed (HTTP %s)", resolved, response.status_code)
        raise _order_failure(response)

    def update_order(self, operations: Any) -> ApiResult:
        raise NotImplementedError("Updating orders is not supported yet")

    def authorize_order(self, order_id: Optional[str] = None) -> ApiResult:
        raise NotImplementedError("Authorize-only payment flows are not supported yet")

    def clear(self) -> None:
        """Forget the pending payload and the current order; credentials stay."""
        self.payload = {}
        self.order_id = ""
        self.order_status = ""
        self.approval_link = ""
