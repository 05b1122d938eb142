"""
License token decoding and signature verification.

Tokens are ``base64url(header).base64url(payload).base64url(signature)`` with
a fixed EdDSA (Ed25519) signature scheme.
"""

from .decode import DecodedToken, TokenDecodeError, decode, decode_payload, decode_token
from .verify import verify_signature

__all__ = [
    "DecodedToken",
    "TokenDecodeError",
    "decode",
    "decode_payload",
    "decode_token",
    "verify_signature",
]
