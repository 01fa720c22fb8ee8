"""
Configuration objects and helpers for the gateway client.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment

__all__ = [
    "DEFAULT_CLIENT_VERSION",
    "DEFAULT_TIMEOUT_SECONDS",
    "ConfigError",
    "Environment",
    "GatewayConfig",
    "GatewayParameters",
    "load_gateway_config",
]

DEFAULT_CLIENT_VERSION = "0.0.2"
DEFAULT_TIMEOUT_SECONDS = 30.0

_PARAMETER_TO_ENV_KEY = {
    "client_id": "PAYPAL_CLIENT_ID",
    "client_secret": "PAYPAL_CLIENT_SECRET",
    "environment": "PAYPAL_ENVIRONMENT",
    "timeout_seconds": "PAYPAL_TIMEOUT_SECONDS",
    "require_created_status": "PAYPAL_REQUIRE_CREATED_STATUS",
    "base_url": "PAYPAL_BASE_URL",
}

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


class Environment(Enum):
    SANDBOX = "sandbox"
    LIVE = "live"

    @property
    def base_url(self) -> str:
        return _BASE_URLS[self]

    @classmethod
    def parse(cls, value: Any) -> "Environment":
        """
        Accept an ``Environment``, a name such as ``"sandbox"`` or ``"live"``,
        or the legacy boolean test-mode flag (``True`` selects the sandbox).
        """
        if isinstance(value, Environment):
            return value
        if isinstance(value, bool):
            return cls.SANDBOX if value else cls.LIVE
        if isinstance(value, str):
            name = value.strip().lower()
            if name in ("sandbox", "test"):
                return cls.SANDBOX
            if name in ("live", "production"):
                return cls.LIVE
        raise ConfigError(f"Unknown PayPal environment {value!r}")


_BASE_URLS = {
    Environment.LIVE: "https://api-m.paypal.com/",
    Environment.SANDBOX: "https://api-m.sandbox.paypal.com/",
}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Environment):
        return value.value
    return str(value)


def _parse_bool(raw: str, field_name: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{field_name} must be a boolean, got '{raw}'")


def _parse_timeout(raw: Any, field_name: str) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be a number, got '{raw}'") from exc
    # NaN and infinity would disable the deadline altogether.
    if not timeout > 0 or timeout == float("inf"):
        raise ConfigError(f"{field_name} must be a finite number greater than zero")
    return timeout


def _require(values: Mapping[str, str], key: str) -> str:
    value = (values.get(key) or "").strip()
    if not value:
        raise ConfigError(f"{key} must be provided")
    return value


@dataclass(frozen=True)
class GatewayParameters:
    """
    Explicit parameter bundle for :func:`load_gateway_config`.

    Any field left as ``None`` falls back to the environment.
    """

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    environment: Optional[Environment | str | bool] = None
    timeout_seconds: Optional[float | int | str] = None
    require_created_status: Optional[bool] = None
    base_url: Optional[str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            if field_name == "environment":
                value = Environment.parse(value)
            overrides[env_key] = _stringify(value)
        return overrides


@dataclass(frozen=True)
class GatewayConfig:
    """
    Everything a :class:`~paypal_gateway.core.client.GatewayClient` needs to
    talk to one PayPal environment.

    ``require_created_status`` keeps the historical behaviour of order lookups,
    which only succeeded while the order was still ``CREATED``.
    """

    client_id: str = ""
    client_secret: str = ""
    environment: Environment = Environment.LIVE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    require_created_status: bool = False
    version: str = DEFAULT_CLIENT_VERSION
    base_url_override: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "client_id", str(self.client_id or "").strip())
        object.__setattr__(self, "client_secret", str(self.client_secret or "").strip())
        object.__setattr__(self, "environment", Environment.parse(self.environment))
        object.__setattr__(
            self, "timeout_seconds", _parse_timeout(self.timeout_seconds, "timeout_seconds")
        )

    @property
    def base_url(self) -> str:
        if self.base_url_override:
            return self.base_url_override.rstrip("/") + "/"
        return self.environment.base_url

    def url_for(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id) and bool(self.client_secret)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "GatewayConfig":
        """
        Build a config from the structured initialisation object, e.g.
        ``{"client_id": ..., "secret": ..., "testMode": True}``.
        """
        client_secret = options.get("client_secret", options.get("secret", ""))
        if "environment" in options:
            environment = Environment.parse(options["environment"])
        else:
            test_mode = options.get("testMode", options.get("test_mode", False))
            environment = Environment.parse(bool(test_mode))

        return cls(
            client_id=options.get("client_id", ""),
            client_secret=client_secret,
            environment=environment,
            timeout_seconds=options.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS),
            require_created_status=bool(options.get("require_created_status", False)),
            version=options.get("version", DEFAULT_CLIENT_VERSION),
            base_url_override=options.get("base_url"),
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "GatewayConfig":
        client_id = _require(values, "PAYPAL_CLIENT_ID")
        client_secret = _require(values, "PAYPAL_CLIENT_SECRET")
        environment = Environment.parse(values.get("PAYPAL_ENVIRONMENT", "live"))

        timeout_seconds = _parse_timeout(
            values.get("PAYPAL_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)),
            "PAYPAL_TIMEOUT_SECONDS",
        )
        require_created_status = _parse_bool(
            values.get("PAYPAL_REQUIRE_CREATED_STATUS", "false"),
            "PAYPAL_REQUIRE_CREATED_STATUS",
        )
        base_url = (values.get("PAYPAL_BASE_URL") or "").strip() or None

        return cls(
            client_id=client_id,
            client_secret=client_secret,
            environment=environment,
            timeout_seconds=timeout_seconds,
            require_created_status=require_created_status,
            base_url_override=base_url,
        )

    @classmethod
    def from_env(
        cls,
        *,
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
    ) -> "GatewayConfig":
        explicit = GatewayParameters(
            client_id=client_id,
            client_secret=client_secret,
            environment=environment,
            timeout_seconds=timeout_seconds,
            require_created_status=require_created_status,
            base_url=base_url,
        )
        merged_overrides = dict(overrides or {})
        if parameters is not None:
            merged_overrides.update(parameters.as_overrides())
        merged_overrides.update(explicit.as_overrides())

        resolved = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(resolved.variables)


def load_gateway_config(
    *,
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
) -> GatewayConfig:
    """
    Convenience wrapper that mirrors :meth:`GatewayConfig.from_env`.

    Settings can come from environment variables, a ``.env`` file, keyword
    arguments, or any combination of the three. Keyword arguments win.
    """
    return GatewayConfig.from_env(
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
