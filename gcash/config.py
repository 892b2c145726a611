"""
Client configuration for the GCash gateway SDK.

A ``GCashConfig`` is built once, either directly or from environment
variables, and handed to ``GCashClient``. It is frozen; nothing reassigns its
fields after construction.

Environment Variables:
    GCASH_PAYMENT_GATEWAY_URL: Gateway base URL (required)
    GCASH_CLIENT_ID: Registered client identifier (required)
    GCASH_SIGNING_PRIVATE_KEY: PEM RSA private key for signing requests (required)
    GCASH_SIGNING_PUBLIC_KEY: PEM RSA public key of the gateway (required)
    GCASH_SIGNING_KEY_VERSION: Key version sent in the Signature header (default: 0)
    GCASH_SIGNING_ALGORITHM: Signature algorithm label (default: RSA256)
    GCASH_ZONE_ID: Time zone used for Request-Time (default: Asia/Manila)
    GCASH_TIMEOUT_SECONDS: Transport timeout (default: 10)
    GCASH_DEBUG: Log wire traffic when 1/true/yes (default: false)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ConfigurationError
from .signing import ALGORITHM_RSA256, SUPPORTED_ALGORITHMS

DEFAULT_ZONE_ID = "Asia/Manila"
DEFAULT_KEY_VERSION = "0"
DEFAULT_TIMEOUT_SECONDS = 10.0

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GCashConfig:
    base_url: str
    client_id: str
    private_key: str
    public_key: str
    key_version: str = DEFAULT_KEY_VERSION
    algorithm: str = ALGORITHM_RSA256
    zone_id: str = DEFAULT_ZONE_ID
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    debug: bool = False

    def __post_init__(self) -> None:
        for name in ("base_url", "client_id", "private_key", "public_key"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(f"{name} is required")
        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigurationError(f"unsupported signature algorithm: {self.algorithm}")
        try:
            ZoneInfo(self.zone_id)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigurationError(f"unknown zone id: {self.zone_id}") from exc

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.zone_id)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GCashConfig":
        env = os.environ if environ is None else environ
        timeout_raw = env.get("GCASH_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout_seconds = float(timeout_raw)
        except ValueError as exc:
            raise ConfigurationError(f"GCASH_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}") from exc
        return cls(
            base_url=env.get("GCASH_PAYMENT_GATEWAY_URL", ""),
            client_id=env.get("GCASH_CLIENT_ID", ""),
            private_key=env.get("GCASH_SIGNING_PRIVATE_KEY", ""),
            public_key=env.get("GCASH_SIGNING_PUBLIC_KEY", ""),
            key_version=env.get("GCASH_SIGNING_KEY_VERSION", DEFAULT_KEY_VERSION),
            algorithm=env.get("GCASH_SIGNING_ALGORITHM", ALGORITHM_RSA256),
            zone_id=env.get("GCASH_ZONE_ID", DEFAULT_ZONE_ID),
            timeout_seconds=timeout_seconds,
            debug=env.get("GCASH_DEBUG", "").strip().lower() in _TRUTHY,
        )

    def __repr__(self) -> str:
        return (
            f"GCashConfig(base_url={self.base_url!r}, client_id={self.client_id!r}, "
            f"key_version={self.key_version!r}, algorithm={self.algorithm!r}, zone_id={self.zone_id!r}, "
            f"timeout_seconds={self.timeout_seconds!r}, debug={self.debug!r})"
        )
