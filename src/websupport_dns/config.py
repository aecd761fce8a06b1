"""Configuration loading and validation from environment variables and solver config."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

from websupport_dns.client import API_BASE, CHALLENGE_TTL, REQUEST_TIMEOUT
from websupport_dns.errors import ConfigError


@dataclass(frozen=True)
class AppConfig:
    """Process configuration loaded from environment variables.

    ``group_name`` is the API group the solver is registered under by the
    webhook server that hosts it; see :attr:`WebsupportSolver.group_name`.
    """

    group_name: str
    api_url: str = API_BASE
    request_timeout: float = REQUEST_TIMEOUT
    record_ttl: int = CHALLENGE_TTL


def _require_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise ConfigError(f"Required environment variable {name} is not set")
    return value


def load_config() -> AppConfig:
    """Load and validate application configuration from environment variables."""
    group_name = _require_env("GROUP_NAME")

    api_url = os.environ.get("WEBSUPPORT_API_URL", API_BASE)
    if not api_url.endswith("/"):
        api_url += "/"

    raw_timeout = os.environ.get("WEBSUPPORT_TIMEOUT", str(REQUEST_TIMEOUT))
    try:
        request_timeout = float(raw_timeout)
    except ValueError:
        raise ConfigError(f"WEBSUPPORT_TIMEOUT must be a number, got: {raw_timeout!r}")
    if request_timeout <= 0:
        raise ConfigError(f"WEBSUPPORT_TIMEOUT must be positive, got: {request_timeout}")

    raw_ttl = os.environ.get("WEBSUPPORT_RECORD_TTL", str(CHALLENGE_TTL))
    try:
        record_ttl = int(raw_ttl)
    except ValueError:
        raise ConfigError(f"WEBSUPPORT_RECORD_TTL must be an integer, got: {raw_ttl!r}")
    if record_ttl < 1:
        raise ConfigError(f"WEBSUPPORT_RECORD_TTL must be a positive integer, got: {record_ttl}")

    return AppConfig(
        group_name=group_name,
        api_url=api_url,
        request_timeout=request_timeout,
        record_ttl=record_ttl,
    )


@dataclass(frozen=True)
class SecretKeySelector:
    """Reference to a key within a Secret in the challenge's namespace."""

    name: str = ""
    key: str = ""


@dataclass(frozen=True)
class SolverConfig:
    """Per-issuer solver configuration.

    Credentials are given inline (``ApiKey``/``ApiSecret``) or through
    ``apiKeySecretRef``, in which case the secret's values win.
    """

    email: str = ""
    api_key_secret_ref: SecretKeySelector = field(default_factory=SecretKeySelector)
    api_key: str = ""
    api_secret: str = field(default="", repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> SolverConfig:
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"error decoding solver config: expected an object, got {type(data).__name__}")
        ref = data.get("apiKeySecretRef") or {}
        if not isinstance(ref, dict):
            raise ConfigError("error decoding solver config: apiKeySecretRef must be an object")
        return cls(
            email=data.get("email", ""),
            api_key_secret_ref=SecretKeySelector(name=ref.get("name", ""), key=ref.get("key", "")),
            api_key=data.get("ApiKey", ""),
            api_secret=data.get("ApiSecret", ""),
        )
