"""
Validator fixed to one pre-validated token.

All accessors are synchronous, never raise and do no I/O: they read the
result captured at construction. The exception is :attr:`BoundValidator.license`,
which raises when the captured result is a failure.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..domain import allowed_domains_of, check_domain, is_domain_allowed
from ..shared.errors import LicenseUnavailableError
from ..timeutil import compute_expiration_info
from ..types import DomainCheckResult, ExpirationInfo, LicenseError, ValidationResult
from . import accessors
from .pipeline import ValidationContext, validate_token
from .unbound import UnboundValidator


class BoundValidator:
    """Synchronous view over a single validation result."""

    def __init__(
        self,
        context: ValidationContext,
        token: str,
        result: ValidationResult,
        current_time: Optional[int] = None,
    ):
        self._context = context
        self._token = token
        self._result = result
        # Clock the result was captured at, when overridden
        self._current_time = current_time

    @property
    def valid(self) -> bool:
        return self._result.valid

    @property
    def result(self) -> ValidationResult:
        return self._result

    @property
    def token(self) -> str:
        return self._token

    @property
    def license(self) -> Dict[str, Any]:
        """The verified payload.

        Raises:
            LicenseUnavailableError: the bound token failed validation.
        """
        if not self._result.valid:
            error = self._result.error
            raise LicenseUnavailableError(
                f"Cannot access license: {error.message}",
                details={"code": error.code.value}
            )
        return self._result.license

    @property
    def error(self) -> Optional[LicenseError]:
        return None if self._result.valid else self._result.error

    def has_flag(self, flag: str) -> bool:
        return accessors.flag_check(self._result, flag).enabled

    def has_flags(self, flags: Iterable[str]) -> Dict[str, bool]:
        return {flag: check.enabled for flag, check in accessors.flag_checks(self._result, flags).items()}

    def get_kind(self) -> Optional[str]:
        return accessors.kind_of(self._result)

    def has_kind(self, kind: str) -> bool:
        return self._result.valid and accessors.kind_of(self._result) == kind

    def get_feature(self, feature: str, default: Any = None) -> Any:
        return accessors.feature_of(self._result, feature, default)

    def has_feature(self, feature: str) -> bool:
        return accessors.has_feature(self._result, feature)

    def is_domain_allowed(self, hostname: str) -> bool:
        if not self._result.valid:
            return False
        allowed_domains = allowed_domains_of(self._result.license)
        if allowed_domains is None:
            return True
        return is_domain_allowed(hostname, allowed_domains)

    def check_domain(self, hostname: str) -> DomainCheckResult:
        return check_domain(self._result, hostname)

    def get_allowed_domains(self) -> Optional[List[str]]:
        if not self._result.valid:
            return None
        return allowed_domains_of(self._result.license)

    def get_expiration_info(self, current_time: Optional[int] = None) -> Optional[ExpirationInfo]:
        if not self._result.valid:
            return None
        if current_time is None:
            current_time = self._current_time
        if current_time is None:
            current_time = self._context.config.timing.current_time
        return compute_expiration_info(self._result.license.get("exp"), current_time)

    async def revalidate(self, *, current_time: Optional[int] = None) -> "BoundValidator":
        """Re-run validation (timing claims go stale) and return a new instance.

        This instance is left untouched.
        """
        result = await validate_token(self._token, self._context, current_time)
        return BoundValidator(self._context, self._token, result, current_time)

    def unbind(self) -> UnboundValidator:
        """An unbound validator sharing this validator's policy."""
        return UnboundValidator(self._context)
