"""
Expiration and not-before checks.

With ``now`` and ``skew`` (seconds):

- ``exp`` present: expired when ``now > exp + skew``; ``EXPIRING_SOON`` when
  ``0 < exp - now <= 7 days``; ``CLOCK_SKEW_APPLIED`` when the token is only
  accepted because of the skew, i.e. ``exp < now <= exp + skew``.
- ``exp`` absent: error unless ``allow_no_expiration``, then a warning.
- ``nbf`` present: not yet valid when ``now < nbf - skew``.
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..config import TimingOptions
from ..timeutil import format_duration, is_expiring_soon, now as current_unix_time
from ..types import ErrorCode, LicenseError, LicenseWarning, WarningCode
from .result import ClaimCheckResult


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _iso(timestamp: float) -> Optional[str]:
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return None


def _not_a_number(claim: str, value: Any) -> LicenseError:
    return LicenseError(
        code=ErrorCode.INVALID_PAYLOAD,
        message=f"Invalid payload: {claim} must be a unix timestamp",
        details={claim: value},
    )


def check_timing(
    payload: Dict[str, Any],
    timing: Optional[TimingOptions] = None,
    allow_no_expiration: bool = False,
) -> ClaimCheckResult:
    timing = timing or TimingOptions()
    skew = timing.clock_skew
    current_time = timing.current_time if timing.current_time is not None else current_unix_time()
    result = ClaimCheckResult()

    exp = payload.get("exp")
    if exp is not None:
        if not _is_number(exp):
            result.errors.append(_not_a_number("exp", exp))
        elif current_time > exp + skew:
            expired_ago = current_time - exp
            result.errors.append(LicenseError(
                code=ErrorCode.TOKEN_EXPIRED,
                message=f"Token expired {format_duration(expired_ago)} ago",
                details={"exp": exp, "current_time": current_time, "expired_at": _iso(exp)},
            ))
        else:
            if is_expiring_soon(exp, current_time):
                remaining = exp - current_time
                result.warnings.append(LicenseWarning(
                    code=WarningCode.EXPIRING_SOON,
                    message=f"Token expires in {format_duration(remaining)}",
                    details={"exp": exp, "seconds_remaining": remaining},
                ))
            if skew > 0 and exp < current_time:
                result.warnings.append(LicenseWarning(
                    code=WarningCode.CLOCK_SKEW_APPLIED,
                    message=f"Token accepted within clock skew tolerance ({skew}s)",
                    details={"clock_skew": skew, "exp": exp, "current_time": current_time},
                ))
    elif not allow_no_expiration:
        result.errors.append(LicenseError(
            code=ErrorCode.EXPIRATION_REQUIRED,
            message="Token must have an expiration time",
        ))
    else:
        result.warnings.append(LicenseWarning(
            code=WarningCode.NO_EXPIRATION,
            message="Token has no expiration time",
        ))

    nbf = payload.get("nbf")
    if nbf is not None:
        if not _is_number(nbf):
            result.errors.append(_not_a_number("nbf", nbf))
        elif current_time < nbf - skew:
            starts_in = nbf - current_time
            result.errors.append(LicenseError(
                code=ErrorCode.TOKEN_NOT_YET_VALID,
                message=f"Token not valid for another {format_duration(starts_in)}",
                details={"nbf": nbf, "current_time": current_time, "valid_from": _iso(nbf)},
            ))

    return result
