"""
Shared pytest fixtures for the GCash SDK tests.
"""

import json
from types import SimpleNamespace

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from gcash import GCashConfig
from gcash.signing import build_canonical_message, encode_signature_header, sign

CLIENT_ID = "2023050412345678"
RESPONSE_TIME = "2023-05-04T12:01:01.123+08:00"


def _keypair() -> SimpleNamespace:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode("ascii")
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")
    return SimpleNamespace(private_key=key, public_key=key.public_key(), private_pem=private_pem, public_pem=public_pem)


@pytest.fixture(scope="session")
def merchant_keys() -> SimpleNamespace:
    """Key pair the client signs requests with."""
    return _keypair()


@pytest.fixture(scope="session")
def gateway_keys() -> SimpleNamespace:
    """Key pair the simulated gateway signs responses with."""
    return _keypair()


@pytest.fixture(scope="session")
def rogue_keys() -> SimpleNamespace:
    """Unrelated key pair, for responses that must not verify."""
    return _keypair()


@pytest.fixture
def config(merchant_keys, gateway_keys) -> GCashConfig:
    return GCashConfig(
        base_url="https://gateway.example.com/",
        client_id=CLIENT_ID,
        private_key=merchant_keys.private_pem,
        public_key=gateway_keys.public_pem,
    )


@pytest.fixture
def signed_response(gateway_keys):
    """Build a gateway response signed the way the real gateway signs it."""

    def build(
        request: httpx.Request,
        body,
        status: int = 200,
        private_key=None,
        client_id: str = CLIENT_ID,
        response_time: str = RESPONSE_TIME,
        algorithm: str = "RSA256",
        content_type: str = "application/json; charset=utf-8",
    ) -> httpx.Response:
        text = body if isinstance(body, str) else json.dumps(body)
        message = build_canonical_message("POST", request.url.path, client_id, response_time, text)
        signature = sign(private_key or gateway_keys.private_key, message)
        headers = {
            "Content-Type": content_type,
            "Client-Id": client_id,
            "Response-Time": response_time,
            "Signature": encode_signature_header(algorithm, "0", signature),
        }
        return httpx.Response(status, content=text.encode("utf-8"), headers=headers)

    return build
