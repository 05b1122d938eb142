"""
Accumulator shared by the claim checks.
"""

from dataclasses import dataclass, field
from typing import List

from ..types import LicenseError, LicenseWarning


@dataclass
class ClaimCheckResult:
    """Errors and warnings produced by one or more claim checks."""

    errors: List[LicenseError] = field(default_factory=list)
    warnings: List[LicenseWarning] = field(default_factory=list)

    def merge(self, other: "ClaimCheckResult") -> "ClaimCheckResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self

    @property
    def ok(self) -> bool:
        return not self.errors
