"""
Pure lookups over a validation result, shared by both validator front-ends.
"""

from typing import Any, Dict, Iterable, Optional

from ..claims import license_features, license_flags
from ..domain import failure_reason
from ..types import FlagCheckResult, ValidationResult


def flag_check(result: ValidationResult, flag: str) -> FlagCheckResult:
    if not result.valid:
        return FlagCheckResult(enabled=False, reason=failure_reason(result))
    if flag in license_flags(result.license):
        return FlagCheckResult(enabled=True)
    return FlagCheckResult(enabled=False, reason="not_in_license")


def flag_checks(result: ValidationResult, flags: Iterable[str]) -> Dict[str, FlagCheckResult]:
    return {flag: flag_check(result, flag) for flag in flags}


def kind_of(result: ValidationResult) -> Optional[str]:
    if not result.valid:
        return None
    return result.license.get("kind")


def feature_of(result: ValidationResult, feature: str, default: Any = None) -> Any:
    if not result.valid:
        return default
    return license_features(result.license).get(feature, default)


def has_feature(result: ValidationResult, feature: str) -> bool:
    return result.valid and feature in license_features(result.license)
