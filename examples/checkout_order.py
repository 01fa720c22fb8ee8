"""
Minimal script that uses the public API to create an order and, once the
buyer has approved it, capture the payment.
"""

from __future__ import annotations

import argparse
import logging
import sys

from paypal_gateway import ConfigError, GatewayError, create_gateway_client, load_gateway_config

ORDER = {
    "intent": "CAPTURE",
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


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create and capture a PayPal order")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYPAL_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "--sandbox",
        action="store_true",
        help="Talk to the sandbox instead of the live system",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_gateway_config(
            env_file=args.env_file,
            environment="sandbox" if args.sandbox else None,
        )
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_gateway_client(config=config)
    try:
        client.acquire_token()
        client.set_payload(ORDER)
        client.create_order()
        logging.info("Send the buyer to %s", client.get_approval_link())
        input("Press enter once the order has been approved... ")
        capture = client.capture_order()
    except GatewayError as exc:
        logging.error("Checkout failed: %s", exc)
        return 1

    logging.info("Order %s captured with status %s", capture.data["id"], capture.data["status"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
