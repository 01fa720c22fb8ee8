"""
Command-line interface for exercising the PayPal gateway client.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Iterable, Sequence, Tuple

from .api import ConfigError, GatewayClient, create_gateway_client, load_gateway_config
from .core.errors import GatewayError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    return {key: value for key, value in pairs}


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paypal-gateway",
        description="Run PayPal token and checkout order calls from the shell",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYPAL_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("token", help="Acquire an access token and report its type")
    commands.add_parser("userinfo", help="Print the merchant account information")

    create = commands.add_parser("create-order", help="Create an order from a JSON file")
    create.add_argument("file", help="JSON order body, or - to read standard input")

    show = commands.add_parser("show-order", help="Print an existing order")
    show.add_argument("order_id")

    capture = commands.add_parser("capture-order", help="Capture an approved order")
    capture.add_argument("order_id")
    return parser


def _read_order_body(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def _dispatch(client: GatewayClient, args: argparse.Namespace) -> None:
    token = client.acquire_token()
    if args.command == "token":
        logging.info(
            "Access token acquired (%s, expires in %s seconds)",
            client.token_type,
            token.data.get("expires_in"),
        )
        return

    if args.command == "userinfo":
        _print_json(client.fetch_account_info().data)
    elif args.command == "create-order":
        client.set_payload(_read_order_body(args.file))
        client.create_order()
        print(client.order_id)
        print(client.get_approval_link())
    elif args.command == "show-order":
        _print_json(client.show_order_details(args.order_id).data)
    elif args.command == "capture-order":
        _print_json(client.capture_order(args.order_id).data)


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_gateway_config(env_file=args.env_file, overrides=overrides)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_gateway_client(config=config)
    logging.info("Using the %s environment at %s", config.environment.value, config.base_url)

    try:
        _dispatch(client, args)
    except OSError as exc:
        logging.error("Could not read order body: %s", exc)
        return 1
    except GatewayError as exc:
        logging.error("%s failed: %s", args.command, exc)
        return 1
    return 0


def main() -> None:
    sys.exit(run_cli())
