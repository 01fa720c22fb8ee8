"""
Core primitives that implement the PayPal order lifecycle.
"""

from .client import GatewayClient
from .config import (
    ConfigError,
    Environment,
    GatewayConfig,
    GatewayParameters,
    load_gateway_config,
)
from .environment import GatewayEnvironment, build_environment, load_env_file
from .errors import AuthError, GatewayError, OrderError, TransportError, ValidationError
from .payloads import find_approval_link, normalize_payload
from .responses import ApiFailure, ApiResult, ApiSuccess, decode_response
from .transport import ApiRequest, RawResponse, ReplayTransport, RequestsTransport, Transport

__all__ = [
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
    "decode_response",
    "find_approval_link",
    "load_env_file",
    "load_gateway_config",
    "normalize_payload",
]
