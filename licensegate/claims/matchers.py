"""
Entitlement matchers: required flags, kind and feature keys.
"""

from typing import Any, Dict, List, Optional, Sequence

from ..types import ErrorCode, LicenseError
from .result import ClaimCheckResult


def license_flags(payload: Dict[str, Any]) -> List[Any]:
    flags = payload.get("flags")
    return list(flags) if isinstance(flags, list) else []


def license_features(payload: Dict[str, Any]) -> Dict[str, Any]:
    features = payload.get("features")
    return features if isinstance(features, dict) else {}


def check_matchers(
    payload: Dict[str, Any],
    required_flags: Sequence[str] = (),
    required_kind: Optional[str] = None,
    required_features: Sequence[str] = (),
) -> ClaimCheckResult:
    """One error per missing flag, one for a kind mismatch, one per missing feature."""
    result = ClaimCheckResult()

    if required_flags:
        available_flags = license_flags(payload)
        for flag in required_flags:
            if flag not in available_flags:
                result.errors.append(LicenseError(
                    code=ErrorCode.MISSING_REQUIRED_FLAG,
                    message=f'Missing required flag: "{flag}"',
                    details={"required_flag": flag, "available_flags": available_flags},
                ))

    if required_kind is not None:
        kind = payload.get("kind")
        if kind != required_kind:
            result.errors.append(LicenseError(
                code=ErrorCode.KIND_MISMATCH,
                message=f'Kind mismatch: expected "{required_kind}", got "{kind if kind is not None else "(none)"}"',
                details={"required_kind": required_kind, "actual_kind": kind},
            ))

    if required_features:
        features = license_features(payload)
        available_features = list(features.keys())
        for feature in required_features:
            if feature not in features:
                result.errors.append(LicenseError(
                    code=ErrorCode.MISSING_REQUIRED_FEATURE,
                    message=f'Missing required feature: "{feature}"',
                    details={"required_feature": feature, "available_features": available_features},
                ))

    return result
