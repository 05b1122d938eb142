"""
The validation pipeline shared by bound and unbound validators.

Stages run strictly in order and each failure is terminal:

    decode -> verify signature -> check revocation -> evaluate claims -> success

Every failure after decoding carries the decoded (unverified) payload. Only
claim evaluation produces warnings, and only it can report several errors.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Optional

from ..claims import evaluate_claims
from ..config import ValidatorConfig
from ..revocation import RevocationChecker
from ..shared.logging import get_logger, realm_context
from ..shared.metrics import ValidationMetrics
from ..tokens.decode import TokenDecodeError, decode_payload, decode_token
from ..tokens.verify import verify_signature
from ..types import LicenseError, ValidationFailure, ValidationResult, ValidationSuccess

logger = get_logger("licensegate.validation")


@dataclass(frozen=True)
class ValidationContext:
    """Everything a validation needs, resolved once and never mutated."""

    realm: str
    public_key: bytes
    config: ValidatorConfig
    revocation: RevocationChecker
    metrics: Optional[ValidationMetrics] = None


def _failure(
    errors: List[LicenseError],
    unverified_payload: Optional[dict] = None,
) -> ValidationFailure:
    return ValidationFailure(
        error=errors[0],
        errors=list(errors) if len(errors) > 1 else None,
        unverified_payload=unverified_payload,
    )


async def _run(token: str, context: ValidationContext, current_time: Optional[int]) -> ValidationResult:
    try:
        decoded = decode_token(token)
    except TokenDecodeError as e:
        return _failure([e.to_error()], decode_payload(token))

    payload = decoded.payload

    signature_error = verify_signature(decoded, context.public_key)
    if signature_error is not None:
        return _failure([signature_error], payload)

    revocation_error = await context.revocation.check(payload)
    if revocation_error is not None:
        return _failure([revocation_error], payload)

    claims = evaluate_claims(payload, context.realm, context.config, current_time)
    if not claims.ok:
        return _failure(claims.errors, payload)

    return ValidationSuccess(
        license=payload,
        warnings=list(claims.warnings) or None,
    )


async def validate_token(
    token: str,
    context: ValidationContext,
    current_time: Optional[int] = None,
) -> ValidationResult:
    """Validate ``token`` against ``context``.

    Never raises for a bad token; every outcome is a result. ``current_time``
    (unix seconds) overrides the configured clock for this call only.
    """
    started = time.perf_counter()
    with realm_context(context.realm):
        result = await _run(token, context, current_time)

        if result.valid:
            outcome, code = "success", "OK"
            logger.debug("License validated", subject=result.license.get("sub"))
        else:
            outcome, code = "failure", result.error.code.value
            logger.info(
                "License validation failed",
                code=code,
                error_count=len(result.errors) if result.errors else 1,
            )

    if context.metrics is not None:
        context.metrics.record_validation(outcome, code, time.perf_counter() - started)

    return result
