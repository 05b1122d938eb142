"""
Test helpers for signing license tokens.
"""

import json
import time
import uuid
from typing import Any, Dict, Optional

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from jwt.utils import base64url_encode

from licensegate.constants import ISSUER

# Fixed clock used by deterministic tests
NOW = 1_700_000_000


def _segment(data: Any) -> str:
    return base64url_encode(json.dumps(data, separators=(",", ":")).encode("utf-8")).decode("ascii")


class KeyPair:
    """Ed25519 key pair used to sign fixture tokens."""

    def __init__(self, private_key: Optional[Ed25519PrivateKey] = None):
        self.private_key = private_key or Ed25519PrivateKey.generate()

    @property
    def public_bytes(self) -> bytes:
        return self.private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)

    @property
    def public_hex(self) -> str:
        return self.public_bytes.hex()

    def sign(self, data: bytes) -> bytes:
        return self.private_key.sign(data)


class LicenseTokenFactory:
    """Factory for creating signed license tokens."""

    def __init__(self, key_pair: Optional[KeyPair] = None):
        self.key_pair = key_pair or KeyPair()

    @staticmethod
    def default_header() -> Dict[str, Any]:
        return {"alg": "EdDSA", "typ": "JWT", "lgv": 1}

    @staticmethod
    def default_payload(realm: str = "app1", **overrides: Any) -> Dict[str, Any]:
        now = int(time.time())
        payload = {
            "iss": ISSUER,
            "sub": "customer-42",
            "aud": realm,
            "iat": now,
            "exp": now + 30 * 24 * 3600,
            "jti": str(uuid.uuid4()),
            "kind": "pro",
            "flags": ["export", "sso"],
            "features": {"seats": 10, "storage_gb": 50},
        }
        payload.update(overrides)
        return payload

    def create_token(
        self,
        payload: Optional[Any] = None,
        header: Optional[Any] = None,
        signature: Optional[bytes] = None,
    ) -> str:
        """Encode and sign. ``payload`` and ``header`` may be any JSON value."""
        if payload is None:
            payload = self.default_payload()
        if header is None:
            header = self.default_header()

        signing_input = f"{_segment(header)}.{_segment(payload)}"
        if signature is None:
            signature = self.key_pair.sign(signing_input.encode("ascii"))
        return f"{signing_input}.{base64url_encode(signature).decode('ascii')}"

    def create_license(self, realm: str = "app1", **claims: Any) -> str:
        """Sign a default license payload with ``claims`` overridden.

        A claim passed as None is removed from the payload.
        """
        payload = self.default_payload(realm)
        for name, value in claims.items():
            if value is None:
                payload.pop(name, None)
            else:
                payload[name] = value
        return self.create_token(payload)
