"""Shared fixtures: captured API bodies and clients wired to a replay transport."""

import json

import pytest

from paypal_gateway import Environment, GatewayClient, ReplayTransport

ORDER = {
    "purchase_units": [
        {
            "items": [
                {
                    "name": "T-Shirt",
                    "description": "Green XL",
                    "quantity": "1",
                    "unit_amount": {"currency_code": "USD", "value": "100.00"},
                }
            ],
            "amount": {
                "currency_code": "USD",
                "value": "100.00",
                "breakdown": {"item_total": {"currency_code": "USD", "value": "100.00"}},
            },
        }
    ],
    "application_context": {
        "return_url": "https://example.com/return",
        "cancel_url": "https://example.com/cancel",
    },
}

CAPTURE_RESPONSE = {
    "id": "97Y953627T008845P",
    "intent": "CAPTURE",
    "status": "COMPLETED",
    "purchase_units": [
        {
            "reference_id": "default",
            "amount": {"currency_code": "USD", "value": "100.00"},
            "payee": {
                "email_address": "john_merchant@example.com",
                "merchant_id": "C7CYMKZDG8D6E",
            },
            "payments": {
                "captures": [
                    {
                        "id": "31H931502U998360B",
                        "status": "COMPLETED",
                        "amount": {"currency_code": "USD", "value": "100.00"},
                        "final_capture": True,
                        "seller_receivable_breakdown": {
                            "gross_amount": {"currency_code": "USD", "value": "100.00"},
                            "paypal_fee": {"currency_code": "USD", "value": "3.98"},
                            "net_amount": {"currency_code": "USD", "value": "96.02"},
                        },
                    }
                ]
            },
        }
    ],
    "payer": {
        "name": {"given_name": "John", "surname": "Doe"},
        "email_address": "sb-bej4m7008058@personal.example.com",
        "payer_id": "87HA637EEKCEW",
    },
    "create_time": "2022-05-16T20:45:50Z",
    "update_time": "2022-05-16T21:09:31Z",
    "links": [
        {
            "href": "https://api.sandbox.paypal.com/v2/checkout/orders/97Y953627T008845P",
            "rel": "self",
            "method": "GET",
        }
    ],
}

CREATE_RESPONSE = {
    "id": "5O190127TN364715T",
    "status": "CREATED",
    "intent": "CAPTURE",
    "links": [
        {
            "href": "https://api-m.sandbox.paypal.com/v2/checkout/orders/5O190127TN364715T",
            "rel": "self",
            "method": "GET",
        },
        {
            "href": "https://www.sandbox.paypal.com/checkoutnow?token=5O190127TN364715T",
            "rel": "approve",
            "method": "GET",
        },
        {
            "href": "https://api-m.sandbox.paypal.com/v2/checkout/orders/5O190127TN364715T/capture",
            "rel": "capture",
            "method": "POST",
        },
    ],
}

TOKEN_RESPONSE = {
    "scope": "https://uri.paypal.com/services/payments/payment",
    "access_token": "A21AAFEpH4PsADK7qSS7pSRsgzfENtu-Q1ysgEDVDESseMHBYXVJYE8ovjj68elIDy8nF26AwPhfXTIeWAZHSLIsQkSYz9ifg",
    "token_type": "Bearer",
    "app_id": "APP-80W284485P519543T",
    "expires_in": 31668,
    "nonce": "2020-04-03T15:35:36ZaYZlGvEkV4yVSz8g6bAKFoGSEzuy3CQcz3ljhibkOHg",
}

UNPROCESSABLE_RESPONSE = {
    "name": "UNPROCESSABLE_ENTITY",
    "message": "The requested action could not be performed, semantically incorrect, or failed business validation.",
    "debug_id": "90957fca61718",
    "details": [
        {
            "issue": "ORDER_NOT_APPROVED",
            "description": "Payer has not yet approved the Order for payment.",
        }
    ],
}


def as_body(payload):
    return json.dumps(payload)


@pytest.fixture
def replay():
    return ReplayTransport()


@pytest.fixture
def client(replay):
    return GatewayClient("client-id", "client-secret", Environment.SANDBOX, transport=replay)


@pytest.fixture
def authenticated_client(client, replay):
    replay.queue(as_body(TOKEN_RESPONSE))
    client.acquire_token()
    return client
