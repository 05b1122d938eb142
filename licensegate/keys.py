"""
Public key normalization and resolution.

Accepted inputs: 32 raw bytes, a 64 character hex string, a base64 or
base64url string, or (through :class:`RemotePublicKey`) a URL serving one of
the string forms as plaintext.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Optional, Union

import httpx

from .config import KeySource, RemotePublicKey, StaticPublicKey
from .constants import PUBLIC_KEY_LENGTH
from .remote import fetch
from .shared.errors import ConfigurationError, PublicKeyFetchError
from .shared.logging import get_logger

logger = get_logger("licensegate.keys")

_HEX_KEY_RE = re.compile(r"^[0-9a-fA-F]{%d}$" % (PUBLIC_KEY_LENGTH * 2))


def normalize_public_key(value: Union[str, bytes, bytearray]) -> bytes:
    """Return the raw public key bytes for any accepted input format."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) != PUBLIC_KEY_LENGTH:
            raise ConfigurationError(
                f"Invalid public key length: expected {PUBLIC_KEY_LENGTH} bytes, got {len(value)}"
            )
        return bytes(value)

    if not isinstance(value, str):
        raise ConfigurationError(
            "Invalid public key type: expected str or bytes",
            details={"type": type(value).__name__}
        )

    text = value.strip()
    if _HEX_KEY_RE.match(text):
        return bytes.fromhex(text)

    raw = _decode_base64_flexible(text)
    if raw is None:
        raise ConfigurationError(
            f"Invalid public key format: expected hex ({PUBLIC_KEY_LENGTH * 2} chars), base64 or raw bytes"
        )
    if len(raw) != PUBLIC_KEY_LENGTH:
        raise ConfigurationError(
            f"Invalid public key length: expected {PUBLIC_KEY_LENGTH} bytes, got {len(raw)}"
        )
    return raw


def _decode_base64_flexible(text: str) -> Optional[bytes]:
    """Decode standard or url-safe base64 with optional padding."""
    if not text:
        return None
    standard = text.replace("-", "+").replace("_", "/")
    standard += "=" * (-len(standard) % 4)
    try:
        return base64.b64decode(standard, validate=True)
    except (binascii.Error, ValueError):
        return None


async def resolve_public_key(source: KeySource, client: Optional[httpx.AsyncClient] = None) -> bytes:
    """Turn a key source into raw key bytes, fetching it when configured by URL.

    Fetch failures are fatal and raise :class:`PublicKeyFetchError`.
    """
    if isinstance(source, StaticPublicKey):
        return normalize_public_key(source.key)

    if isinstance(source, RemotePublicKey):
        try:
            response = await fetch(source.url, client)
        except httpx.HTTPError as exc:
            logger.error("Public key fetch failed", url=source.url, error=str(exc))
            raise PublicKeyFetchError(source.url, details={"error": str(exc)}) from exc

        if not response.is_success:
            logger.error("Public key fetch returned error status", url=source.url, status_code=response.status_code)
            raise PublicKeyFetchError(
                source.url,
                message=f"Failed to fetch public key ({response.status_code} {response.reason_phrase})",
                details={"status_code": response.status_code}
            )

        key = normalize_public_key(response.text.strip())
        logger.info("Public key resolved from URL", url=source.url)
        return key

    raise ConfigurationError("Either a public key or a public key URL must be provided")
