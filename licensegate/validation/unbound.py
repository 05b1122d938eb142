"""
Stateless validator: holds only policy and validates a token per call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from ..domain import allowed_domains_of, check_domain
from ..timeutil import compute_expiration_info
from ..tokens.decode import decode_payload
from ..types import DomainCheckResult, ExpirationInfo, FlagCheckResult, ValidationResult
from . import accessors
from .pipeline import ValidationContext, validate_token

if TYPE_CHECKING:
    from .bound import BoundValidator


class UnboundValidator:
    """Validates tokens supplied per call.

    Safe to share between concurrent tasks: the only state is the immutable
    :class:`ValidationContext`.
    """

    def __init__(self, context: ValidationContext):
        self._context = context

    @property
    def realm(self) -> str:
        return self._context.realm

    @property
    def context(self) -> ValidationContext:
        return self._context

    async def validate(self, token: str, *, current_time: Optional[int] = None) -> ValidationResult:
        """Run the full pipeline for ``token``."""
        return await validate_token(token, self._context, current_time)

    async def get_license(self, token: str) -> Optional[Dict[str, Any]]:
        """The verified payload, or None if the token is rejected."""
        result = await self.validate(token)
        return result.license if result.valid else None

    async def has_flag(self, token: str, flag: str) -> FlagCheckResult:
        return accessors.flag_check(await self.validate(token), flag)

    async def has_flags(self, token: str, flags: Iterable[str]) -> Dict[str, FlagCheckResult]:
        """Check several flags with a single validation."""
        return accessors.flag_checks(await self.validate(token), flags)

    async def get_kind(self, token: str) -> Optional[str]:
        return accessors.kind_of(await self.validate(token))

    async def has_kind(self, token: str, kind: str) -> bool:
        result = await self.validate(token)
        return result.valid and accessors.kind_of(result) == kind

    async def get_feature(self, token: str, feature: str, default: Any = None) -> Any:
        return accessors.feature_of(await self.validate(token), feature, default)

    async def has_feature(self, token: str, feature: str) -> bool:
        return accessors.has_feature(await self.validate(token), feature)

    async def check_domain(self, token: str, hostname: str) -> DomainCheckResult:
        return check_domain(await self.validate(token), hostname)

    async def get_allowed_domains(self, token: str) -> Optional[List[str]]:
        result = await self.validate(token)
        if not result.valid:
            return None
        return allowed_domains_of(result.license)

    def get_expiration_info(self, token: str) -> Optional[ExpirationInfo]:
        """Expiration of the token's unverified ``exp`` claim.

        Does not validate the token; use it for display, not for gating.
        """
        payload = decode_payload(token)
        if payload is None:
            return None
        return compute_expiration_info(payload.get("exp"), self._context.config.timing.current_time)

    async def bind(self, token: str, *, current_time: Optional[int] = None) -> "BoundValidator":
        """Validate ``token`` once and return a validator fixed to that result."""
        from .bound import BoundValidator

        result = await self.validate(token, current_time=current_time)
        return BoundValidator(self._context, token, result, current_time)
