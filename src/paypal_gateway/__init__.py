"""
Public facade for the PayPal gateway client package.

The most useful pieces are re-exported here so integrators can
``from paypal_gateway import ...`` without navigating the package.
"""

from .api import create_gateway_client
from .core import (
    ApiFailure,
    ApiRequest,
    ApiResult,
    ApiSuccess,
    AuthError,
    ConfigError,
    Environment,
    GatewayClient,
    GatewayConfig,
    GatewayEnvironment,
    GatewayError,
    GatewayParameters,
    OrderError,
    RawResponse,
    ReplayTransport,
    RequestsTransport,
    Transport,
    TransportError,
    ValidationError,
    build_environment,
    decode_response,
    load_env_file,
    load_gateway_config,
)

__version__ = "0.1.0"

__all__ = (
    "ApiFailure",
    "ApiRequest",
    "ApiResult",
    "ApiSuccess",
    "AuthError",
    "ConfigError",
    "Environment",
    "GatewayClient",
    "GatewayConfig",
    "GatewayEnvironment",
    "GatewayError",
    "GatewayParameters",
    "OrderError",
    "RawResponse",
    "ReplayTransport",
    "RequestsTransport",
    "Transport",
    "TransportError",
    "ValidationError",
    "build_environment",
    "create_gateway_client",
    "decode_response",
    "load_env_file",
    "load_gateway_config",
)
