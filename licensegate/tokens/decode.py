"""
Structural decoding of license tokens.

Nothing here checks the signature; see :mod:`licensegate.tokens.verify`.
"""

from __future__ import annotations

import binascii
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from jwt.utils import base64url_decode

from ..constants import ALGORITHM, SIGNATURE_LENGTH, SUPPORTED_VERSIONS, TOKEN_TYPE, VERSION_HEADER
from ..shared.errors import LicenseGateException
from ..types import ErrorCode, LicenseError


class TokenDecodeError(LicenseGateException):
    """Raised by :func:`decode_token`; always converted to a failure result by callers."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(code.value, message)
        self.error_code = code

    def to_error(self) -> LicenseError:
        return LicenseError(code=self.error_code, message=self.message)


@dataclass(frozen=True)
class DecodedToken:
    """A structurally valid, not yet verified, token."""

    header: Dict[str, Any]
    payload: Dict[str, Any]
    signature: bytes
    # Exact "header.payload" text that was signed
    signing_input: str

    @property
    def version(self) -> int:
        return self.header[VERSION_HEADER]


def _malformed(reason: str) -> TokenDecodeError:
    return TokenDecodeError(ErrorCode.MALFORMED_TOKEN, f"Malformed token: {reason}")


def _invalid_header(reason: str) -> TokenDecodeError:
    return TokenDecodeError(ErrorCode.INVALID_HEADER, f"Invalid header: {reason}")


def _invalid_payload(reason: str) -> TokenDecodeError:
    return TokenDecodeError(ErrorCode.INVALID_PAYLOAD, f"Invalid payload: {reason}")


def _decode_json_segment(segment: str) -> Any:
    raw = base64url_decode(segment)
    return json.loads(raw.decode("utf-8"))


def _check_header(header: Any) -> None:
    if not isinstance(header, dict):
        raise _invalid_header("header must be a JSON object")

    alg = header.get("alg")
    if alg != ALGORITHM:
        raise _invalid_header(f"alg: expected {ALGORITHM}, got {alg}")

    typ = header.get("typ")
    if typ != TOKEN_TYPE:
        raise _invalid_header(f"typ: expected {TOKEN_TYPE}, got {typ}")

    if VERSION_HEADER not in header:
        raise _invalid_header(f"{VERSION_HEADER}: missing token version")

    version = header[VERSION_HEADER]
    if isinstance(version, bool) or version not in SUPPORTED_VERSIONS:
        supported = ", ".join(str(v) for v in SUPPORTED_VERSIONS)
        raise _invalid_header(f"{VERSION_HEADER}: unsupported token version {version}, supported: {supported}")


def decode_token(token: str) -> DecodedToken:
    """Split, decode and structurally validate a token.

    Raises :class:`TokenDecodeError` carrying ``MALFORMED_TOKEN``,
    ``INVALID_HEADER`` or ``INVALID_PAYLOAD``.
    """
    if not isinstance(token, str):
        raise _malformed("token must be a string")

    parts = token.split(".")
    if len(parts) != 3:
        raise _malformed(f"expected 3 segments, got {len(parts)}")

    header_b64, payload_b64, signature_b64 = parts

    try:
        header = _decode_json_segment(header_b64)
    except (binascii.Error, ValueError):
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise _malformed("failed to decode header") from None
    _check_header(header)

    try:
        payload = _decode_json_segment(payload_b64)
    except (binascii.Error, ValueError):
        raise _malformed("failed to decode payload") from None
    if not isinstance(payload, dict):
        raise _invalid_payload("payload must be a JSON object")

    try:
        signature = base64url_decode(signature_b64)
    except (binascii.Error, ValueError):
        raise _malformed("failed to decode signature") from None
    if len(signature) != SIGNATURE_LENGTH:
        raise _invalid_payload(
            f"signature length: expected {SIGNATURE_LENGTH} bytes, got {len(signature)}"
        )

    return DecodedToken(
        header=header,
        payload=payload,
        signature=signature,
        signing_input=f"{header_b64}.{payload_b64}",
    )


def decode_payload(token: str) -> Optional[Dict[str, Any]]:
    """Best-effort payload extraction for diagnostics.

    Ignores the header and signature entirely. The result is unverified.
    """
    if not isinstance(token, str):
        return None
    parts = token.split(".")
    if len(parts) != 3:
        return None
    try:
        payload = _decode_json_segment(parts[1])
    except (binascii.Error, ValueError):
        return None
    return payload if isinstance(payload, dict) else None


def decode(token: str) -> Optional[DecodedToken]:
    """Like :func:`decode_token` but returns None instead of raising."""
    try:
        return decode_token(token)
    except TokenDecodeError:
        return None
