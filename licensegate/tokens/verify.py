"""
Ed25519 signature verification over the exact signed token prefix.
"""

from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from ..types import ErrorCode, LicenseError
from .decode import DecodedToken


def _ed25519_verify(signature: bytes, message: bytes, public_key: bytes) -> bool:
    try:
        Ed25519PublicKey.from_public_bytes(public_key).verify(signature, message)
    except InvalidSignature:
        return False
    except Exception:
        # Malformed key or signature bytes look the same as a bad signature to callers
        return False
    return True


def verify_signature(decoded: DecodedToken, public_key: bytes) -> Optional[LicenseError]:
    """Return None when the signature is valid, otherwise the failure error."""
    message = decoded.signing_input.encode("ascii")
    if _ed25519_verify(decoded.signature, message, public_key):
        return None
    return LicenseError(
        code=ErrorCode.SIGNATURE_VERIFICATION_FAILED,
        message="Signature verification failed",
    )
