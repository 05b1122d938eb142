"""
Result and claim types shared across the validation pipeline.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ErrorCode(str, Enum):
    """Validation failure codes."""
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    INVALID_HEADER = "INVALID_HEADER"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    SIGNATURE_VERIFICATION_FAILED = "SIGNATURE_VERIFICATION_FAILED"
    TOKEN_REVOKED = "TOKEN_REVOKED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_NOT_YET_VALID = "TOKEN_NOT_YET_VALID"
    EXPIRATION_REQUIRED = "EXPIRATION_REQUIRED"
    INVALID_ISSUER = "INVALID_ISSUER"
    INVALID_AUDIENCE = "INVALID_AUDIENCE"
    MISSING_REQUIRED_FLAG = "MISSING_REQUIRED_FLAG"
    KIND_MISMATCH = "KIND_MISMATCH"
    MISSING_REQUIRED_FEATURE = "MISSING_REQUIRED_FEATURE"


class WarningCode(str, Enum):
    """Non-fatal validation findings."""
    EXPIRING_SOON = "EXPIRING_SOON"
    NO_EXPIRATION = "NO_EXPIRATION"
    CLOCK_SKEW_APPLIED = "CLOCK_SKEW_APPLIED"


class LicenseError(BaseModel):
    """A single validation error."""
    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str
    details: Optional[Dict[str, Any]] = None


class LicenseWarning(BaseModel):
    """A single validation warning."""
    model_config = ConfigDict(frozen=True)

    code: WarningCode
    message: str
    details: Optional[Dict[str, Any]] = None


class ValidationSuccess(BaseModel):
    """Token is authentic and satisfies every configured claim."""
    model_config = ConfigDict(frozen=True)

    valid: Literal[True] = True
    license: Dict[str, Any]
    warnings: Optional[List[LicenseWarning]] = None


class ValidationFailure(BaseModel):
    """Token was rejected.

    ``error`` is the primary reason. ``errors`` is only set when claim
    evaluation found more than one problem and then starts with ``error``.
    ``unverified_payload`` is for diagnostics and must not be trusted.
    """
    model_config = ConfigDict(frozen=True)

    valid: Literal[False] = False
    error: LicenseError
    errors: Optional[List[LicenseError]] = None
    unverified_payload: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def _primary_error_leads(self) -> "ValidationFailure":
        if self.errors is not None and (not self.errors or self.errors[0] != self.error):
            raise ValueError("errors must start with the primary error")
        return self


ValidationResult = Union[ValidationSuccess, ValidationFailure]


class RevocationList(BaseModel):
    """Denylist of token ids and subjects."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    jti: Optional[List[str]] = None
    sub: Optional[List[str]] = None


class FlagCheckResult(BaseModel):
    """Outcome of checking a single flag against a token."""
    enabled: bool
    reason: Optional[Literal["not_in_license", "invalid_token", "expired"]] = None


class DomainCheckResult(BaseModel):
    """Outcome of checking a hostname against a token's domain allowlist."""
    allowed: bool
    reason: Optional[Literal[
        "domain_not_in_list",
        "empty_allowlist",
        "no_restrictions",
        "invalid_token",
        "expired",
    ]] = None


class ExpirationInfo(BaseModel):
    """Expiration state of a token at a point in time."""
    expires_at: Optional[int] = Field(None, description="exp claim, None when absent")
    is_expired: bool = False
    seconds_remaining: Optional[int] = Field(None, description="Negative once expired")
    time_remaining: Optional[str] = Field(None, description="Human readable duration")
