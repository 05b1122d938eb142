"""
Claim evaluation.

The three checks are independent and all of them run, so a rejected token
reports every claim problem at once.
"""

from dataclasses import replace
from typing import Any, Dict, Optional

from ..config import ValidatorConfig
from .identity import check_identity, normalize_audience
from .matchers import check_matchers, license_features, license_flags
from .result import ClaimCheckResult
from .timing import check_timing


def evaluate_claims(
    payload: Dict[str, Any],
    realm: str,
    config: ValidatorConfig,
    current_time: Optional[int] = None,
) -> ClaimCheckResult:
    """Run identity, timing and matcher checks and merge them in that order.

    ``current_time`` overrides ``config.timing.current_time`` for this call.
    """
    timing = config.timing
    if current_time is not None:
        timing = replace(timing, current_time=current_time)

    result = ClaimCheckResult()
    result.merge(check_identity(payload, realm))
    result.merge(check_timing(payload, timing, config.allow_no_expiration))
    result.merge(check_matchers(
        payload,
        required_flags=config.required_flags,
        required_kind=config.required_kind,
        required_features=config.required_features,
    ))
    return result


__all__ = [
    "ClaimCheckResult",
    "check_identity",
    "check_matchers",
    "check_timing",
    "evaluate_claims",
    "license_features",
    "license_flags",
    "normalize_audience",
]
