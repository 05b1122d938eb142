"""
Issuer and audience checks.
"""

from typing import Any, Dict, List

from ..constants import ISSUER
from ..types import ErrorCode, LicenseError
from .result import ClaimCheckResult


def normalize_audience(aud: Any) -> List[Any]:
    """``aud`` may be a single string or a list; anything else counts as empty."""
    if isinstance(aud, str):
        return [aud] if aud else []
    if isinstance(aud, list):
        return list(aud)
    return []


def check_identity(payload: Dict[str, Any], realm: str) -> ClaimCheckResult:
    """Issuer must be ours and the audience must include ``realm``."""
    result = ClaimCheckResult()

    iss = payload.get("iss")
    if iss != ISSUER:
        result.errors.append(LicenseError(
            code=ErrorCode.INVALID_ISSUER,
            message=f'Invalid issuer: expected "{ISSUER}", got "{iss if iss is not None else "(none)"}"',
            details={"expected": ISSUER, "actual": iss},
        ))

    audiences = normalize_audience(payload.get("aud"))
    if realm not in audiences:
        shown = ", ".join(str(a) for a in audiences) or "(none)"
        result.errors.append(LicenseError(
            code=ErrorCode.INVALID_AUDIENCE,
            message=f'Token not authorized for this realm: expected audience to include "{realm}", got [{shown}]',
            details={"expected_realm": realm, "actual_audience": audiences},
        ))

    return result
