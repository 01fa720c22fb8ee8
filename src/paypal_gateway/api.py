"""
Public, high-level helpers for building a gateway client.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import GatewayClient
from .core.config import (
    ConfigError,
    Environment,
    GatewayConfig,
    GatewayParameters,
    load_gateway_config,
)
from .core.transport import Transport

__all__ = [
    "ConfigError",
    "Environment",
    "GatewayClient",
    "GatewayConfig",
    "GatewayParameters",
    "create_gateway_client",
    "load_gateway_config",
]


def create_gateway_client(
    *,
    config: Optional[GatewayConfig] = None,
    transport: Optional[Transport] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[GatewayParameters] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    environment: Optional[Environment | str | bool] = None,
    timeout_seconds: Optional[float | int | str] = None,
    require_created_status: Optional[bool] = None,
    base_url: Optional[str] = None,
) -> GatewayClient:
    """
    Construct a :class:`GatewayClient`.

    Callers either supply a ready-made :class:`GatewayConfig` or let the helper
    assemble one from PAYPAL_* environment data and keyword arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            client_id,
            client_secret,
            environment,
            timeout_seconds,
            require_created_status,
            base_url,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built GatewayConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_gateway_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            client_id=client_id,
            client_secret=client_secret,
            environment=environment,
            timeout_seconds=timeout_seconds,
            require_created_status=require_created_status,
            base_url=base_url,
        )
    return GatewayClient(config=cfg, transport=transport, session=session)
