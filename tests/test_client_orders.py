"""Tests for the order lifecycle of GatewayClient."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

import pytest

from conftest import (
    CAPTURE_RESPONSE,
    CREATE_RESPONSE,
    ORDER,
    TOKEN_RESPONSE,
    UNPROCESSABLE_RESPONSE,
    as_body,
)
from paypal_gateway import (
    Environment,
    GatewayClient,
    GatewayConfig,
    OrderError,
    RawResponse,
    ReplayTransport,
    TransportError,
    ValidationError,
)


@dataclass
class PurchaseRecord:
    purchase_units: List[Dict[str, Any]] = field(default_factory=list)
    application_context: Dict[str, str] = field(default_factory=dict)


def test_payload_forms_are_equivalent(client):
    client.set_payload(json.dumps(ORDER))
    from_json = client.get_payload()

    client.set_payload(ORDER)
    from_mapping = client.get_payload()

    client.set_payload(
        PurchaseRecord(
            purchase_units=ORDER["purchase_units"],
            application_context=ORDER["application_context"],
        )
    )
    from_record = client.get_payload()

    assert from_json == from_mapping == from_record == ORDER


def test_set_payload_rejects_invalid_json(client):
    with pytest.raises(ValidationError):
        client.set_payload('{"purchase_units": [')


def test_add_field_keeps_other_keys(client):
    client.set_payload(ORDER)
    client.add_field("intent", "CAPTURE")

    payload = client.get_payload()
    assert payload["intent"] == "CAPTURE"
    assert payload["purchase_units"] == ORDER["purchase_units"]
    assert payload["application_context"] == ORDER["application_context"]


def test_create_order_success(authenticated_client, replay):
    authenticated_client.set_payload(ORDER)
    authenticated_client.add_field("intent", "CAPTURE")
    replay.queue(RawResponse(201, as_body(CREATE_RESPONSE)))

    result = authenticated_client.create_order()

    assert result.success is True
    assert result.data["id"] == "5O190127TN364715T"
    assert authenticated_client.order_id == "5O190127TN364715T"
    assert authenticated_client.order_status == "CREATED"
    assert authenticated_client.get_approval_link() == CREATE_RESPONSE["links"][1]["href"]

    request = replay.requests[-1]
    assert request.url == "https://api-m.sandbox.paypal.com/v2/checkout/orders"
    assert request.headers["Prefer"] == "return=representation"
    assert request.headers["PayPal-Request-Id"] == authenticated_client.request_id
    assert request.headers["Authorization"] == f"Bearer {TOKEN_RESPONSE['access_token']}"
    assert request.json["intent"] == "CAPTURE"


def test_create_order_finds_approve_link_by_relation(authenticated_client, replay):
    response = dict(CREATE_RESPONSE, status="APPROVED")
    response["links"] = list(reversed(CREATE_RESPONSE["links"]))
    replay.queue(as_body(response))

    result = authenticated_client.create_order()

    assert result.success is True
    assert authenticated_client.get_approval_link() == (
        "https://www.sandbox.paypal.com/checkoutnow?token=5O190127TN364715T"
    )


def test_create_order_failure_reports_first_issue(authenticated_client, replay):
    replay.queue(
        RawResponse(
            400,
            as_body(
                {
                    "name": "INVALID_REQUEST",
                    "message": "Request is not well-formed, syntactically incorrect, or violates schema.",
                    "details": [
                        {
                            "field": "/intent",
                            "issue": "MISSING_REQUIRED_PARAMETER",
                            "description": "A required field / parameter is missing.",
                        }
                    ],
                }
            ),
        )
    )

    with pytest.raises(OrderError) as excinfo:
        authenticated_client.create_order()

    assert excinfo.value.issue == "MISSING_REQUIRED_PARAMETER"
    assert "A required field / parameter is missing." in str(excinfo.value)
    assert authenticated_client.order_id == ""
    assert authenticated_client.get_approval_link() == ""


def test_create_order_with_unexpected_status(authenticated_client, replay):
    replay.queue(as_body(dict(CREATE_RESPONSE, status="VOIDED")))
    with pytest.raises(OrderError):
        authenticated_client.create_order()
    assert authenticated_client.order_id == ""


def test_capture_from_injected_response():
    transport = ReplayTransport([json.dumps(CAPTURE_RESPONSE)])
    client = GatewayClient("client-id", "client-secret", True, transport=transport)

    result = client.capture_order("97Y953627T008845P")

    assert result.success is True
    assert result.data["id"] == "97Y953627T008845P"
    assert result.data == CAPTURE_RESPONSE
    assert transport.requests[0].url.endswith("v2/checkout/orders/97Y953627T008845P/capture")
    assert transport.requests[0].headers["PayPal-Request-Id"] == client.request_id


def test_capture_uses_stored_order_id(authenticated_client, replay):
    replay.queue(as_body(CREATE_RESPONSE))
    authenticated_client.create_order()
    replay.queue(as_body(dict(CAPTURE_RESPONSE, id=CREATE_RESPONSE["id"])))

    authenticated_client.capture_order()

    assert replay.requests[-1].url.endswith(f"v2/checkout/orders/{CREATE_RESPONSE['id']}/capture")
    assert authenticated_client.order_status == "COMPLETED"


def test_capture_of_unapproved_order(authenticated_client, replay):
    replay.queue(RawResponse(422, as_body(UNPROCESSABLE_RESPONSE)))

    with pytest.raises(OrderError) as excinfo:
        authenticated_client.capture_order("5O190127TN364715T")

    assert str(excinfo.value) == (
        "ORDER_NOT_APPROVED Payer has not yet approved the Order for payment."
    )


def test_capture_without_order_id_makes_no_call(client, replay):
    with pytest.raises(OrderError) as excinfo:
        client.capture_order()
    assert excinfo.value.issue == "MISSING_ORDER_ID"
    assert replay.requests == []


def test_capture_with_empty_body(client, replay):
    replay.queue(RawResponse(204, ""))
    with pytest.raises(TransportError):
        client.capture_order("5O190127TN364715T")


def test_show_order_details_surfaces_status(authenticated_client, replay):
    replay.queue(as_body(CREATE_RESPONSE))
    authenticated_client.create_order()
    replay.queue(as_body(dict(CREATE_RESPONSE, status="APPROVED")))

    result = authenticated_client.show_order_details()

    assert result.success is True
    assert result.data["status"] == "APPROVED"
    assert authenticated_client.order_status == "APPROVED"
    assert replay.requests[-1].method == "GET"
    assert replay.requests[-1].url.endswith(f"v2/checkout/orders/{CREATE_RESPONSE['id']}")


def test_show_order_details_strict_created_status(replay):
    config = GatewayConfig("id", "secret", Environment.SANDBOX, require_created_status=True)
    client = GatewayClient(config=config, transport=replay)
    replay.queue(as_body(dict(CREATE_RESPONSE, status="APPROVED")))

    with pytest.raises(OrderError) as excinfo:
        client.show_order_details("5O190127TN364715T")
    assert excinfo.value.issue == "UNEXPECTED_STATUS"

    replay.queue(as_body(CREATE_RESPONSE))
    assert client.show_order_details("5O190127TN364715T").success is True


def test_show_order_details_not_found(authenticated_client, replay):
    replay.queue(
        RawResponse(
            404,
            as_body(
                {
                    "name": "RESOURCE_NOT_FOUND",
                    "message": "The specified resource does not exist.",
                    "details": [
                        {
                            "issue": "INVALID_RESOURCE_ID",
                            "description": "Specified resource ID does not exist.",
                        }
                    ],
                }
            ),
        )
    )
    with pytest.raises(OrderError) as excinfo:
        authenticated_client.show_order_details("MISSING")
    assert excinfo.value.issue == "INVALID_RESOURCE_ID"


def test_clear_resets_order_but_not_session(authenticated_client, replay):
    authenticated_client.set_payload(ORDER)
    replay.queue(as_body(CREATE_RESPONSE))
    authenticated_client.create_order()
    request_id = authenticated_client.request_id

    authenticated_client.clear()

    assert authenticated_client.order_id == ""
    assert authenticated_client.get_approval_link() == ""
    assert authenticated_client.get_payload() == {}
    assert authenticated_client.access_token == TOKEN_RESPONSE["access_token"]
    assert authenticated_client.client_id == "client-id"
    assert authenticated_client.request_id == request_id


def test_regenerate_request_id(client):
    previous = client.request_id
    assert client.regenerate_request_id() != previous
    assert client.request_id != previous


def test_unsupported_operations(client):
    with pytest.raises(NotImplementedError):
        client.update_order([{"op": "replace", "path": "/intent", "value": "AUTHORIZE"}])
    with pytest.raises(NotImplementedError):
        client.authorize_order("5O190127TN364715T")


def test_create_order_with_malformed_links(authenticated_client, replay):
    replay.queue(as_body(dict(CREATE_RESPONSE, links=5)))

    result = authenticated_client.create_order()

    assert result.success is True
    assert authenticated_client.order_id == CREATE_RESPONSE["id"]
    assert authenticated_client.get_approval_link() == ""


def test_show_order_details_without_order_id_makes_no_call(client, replay):
    with pytest.raises(OrderError) as excinfo:
        client.show_order_details()
    assert excinfo.value.issue == "MISSING_ORDER_ID"
    assert replay.requests == []
