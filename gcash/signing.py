from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import Dict, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .errors import ConfigurationError, MissingSignatureField, SigningError

logger = logging.getLogger(__name__)

ALGORITHM_RSA256 = "RSA256"
SUPPORTED_ALGORITHMS = (ALGORITHM_RSA256,)

_PEM_MARKER = re.compile(r"-----(BEGIN|END) [A-Z0-9 ]+-----")
_BASE64URL = re.compile(r"[A-Za-z0-9_-]*")


def build_canonical_message(method: str, path: str, client_id: str, timestamp: str, payload: Union[str, bytes]) -> bytes:
    """Render the exact bytes that are signed on send and verified on receive.

    ``timestamp`` and ``payload`` must be what travelled on the wire. A
    ``str`` payload is encoded as UTF-8; received bodies are passed as the raw
    bytes so no charset decoding sits between the wire and the verifier.
    Re-serializing a parsed body changes key order or spacing and the
    signature no longer matches.
    """
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    return f"{method} {path}\n{client_id}.{timestamp}.".encode("utf-8") + payload


def _pem_to_der(pem: str, kind: str) -> bytes:
    if not isinstance(pem, str) or not pem.strip():
        raise ConfigurationError(f"{kind} key is required")
    body = re.sub(r"\s+", "", _PEM_MARKER.sub("", pem))
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ConfigurationError(f"{kind} key is not valid base64") from exc


def load_private_key(pem: str) -> rsa.RSAPrivateKey:
    der = _pem_to_der(pem, "private")
    try:
        key = serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise ConfigurationError("malformed private key") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise ConfigurationError("private key must be an RSA key")
    return key


def load_public_key(pem: str) -> rsa.RSAPublicKey:
    der = _pem_to_der(pem, "public")
    try:
        key = serialization.load_der_public_key(der)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise ConfigurationError("malformed public key") from exc
    if not isinstance(key, rsa.RSAPublicKey):
        raise ConfigurationError("public key must be an RSA key")
    return key


def sign(private_key: rsa.RSAPrivateKey, message: bytes) -> bytes:
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise SigningError("signing key must be an RSA private key")
    try:
        return private_key.sign(bytes(message), padding.PKCS1v15(), hashes.SHA256())
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise SigningError("failed to sign request payload") from exc


def verify(public_key: rsa.RSAPublicKey, message: bytes, signature: bytes) -> bool:
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise ConfigurationError("verification key must be an RSA public key")
    signature = bytes(signature)
    if len(signature) != (public_key.key_size + 7) // 8:
        return False
    try:
        public_key.verify(signature, bytes(message), padding.PKCS1v15(), hashes.SHA256())
    except InvalidSignature:
        return False
    return True


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(bytes(data)).decode("ascii").rstrip("=")


def b64url_decode(value: str) -> bytes:
    # empty result for anything undecodable; it can never verify
    stripped = value.strip().rstrip("=")
    if _BASE64URL.fullmatch(stripped) is None or len(stripped) % 4 == 1:
        logger.debug("undecodable base64url signature value of length %d", len(value))
        return b""
    pad_len = (4 - (len(stripped) % 4)) % 4
    return base64.urlsafe_b64decode(stripped + ("=" * pad_len))


def encode_signature_header(algorithm: str, key_version: str, signature: bytes) -> str:
    return f"algorithm={algorithm}, keyVersion={key_version}, signature={b64url_encode(signature)}"


def parse_signature_header(value: str) -> Dict[str, str]:
    """Parse ``key=value`` pairs separated by commas.

    Whitespace around segments, keys and values is ignored, segments without a
    key are skipped, and the first occurrence of a key wins. Never raises.
    """
    fields: Dict[str, str] = {}
    for segment in (value or "").split(","):
        key, sep, val = segment.partition("=")
        key = key.strip()
        if not sep or not key or key in fields:
            continue
        fields[key] = val.strip()
    return fields


def decode_signature_header(value: str) -> bytes:
    fields = parse_signature_header(value)
    if "signature" not in fields:
        raise MissingSignatureField(value)
    return b64url_decode(fields["signature"])


@dataclass(frozen=True)
class KeyMaterial:
    private_key: rsa.RSAPrivateKey
    public_key: rsa.RSAPublicKey
    key_version: str = "0"
    algorithm: str = ALGORITHM_RSA256

    @classmethod
    def from_pem(cls, private_key: str, public_key: str, key_version: str = "0", algorithm: str = ALGORITHM_RSA256) -> "KeyMaterial":
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigurationError(f"unsupported signature algorithm: {algorithm}")
        return cls(
            private_key=load_private_key(private_key),
            public_key=load_public_key(public_key),
            key_version=str(key_version),
            algorithm=algorithm,
        )

    def sign(self, message: bytes) -> bytes:
        return sign(self.private_key, message)

    def verify(self, message: bytes, signature: bytes) -> bool:
        return verify(self.public_key, message, signature)

    def signature_header(self, message: bytes) -> str:
        return encode_signature_header(self.algorithm, self.key_version, self.sign(message))
