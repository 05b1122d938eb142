"""
Hostname allowlist matching for the ``allowedDomains`` claim.

Patterns are exact hostnames or ``*.suffix`` wildcards. A wildcard matches any
subdomain depth but never the bare suffix itself.
"""

from typing import Any, Dict, Optional, Sequence

from .types import DomainCheckResult, ErrorCode, ValidationResult


def matches_domain(hostname: str, pattern: str) -> bool:
    host = hostname.lower()
    pattern = pattern.lower()

    if host == pattern:
        return True

    if pattern.startswith("*."):
        suffix = pattern[1:]  # ".example.org"
        return host.endswith(suffix) and len(host) > len(suffix)

    return False


def is_domain_allowed(hostname: str, allowed_domains: Sequence[str]) -> bool:
    """True iff any pattern matches; an empty allowlist denies everything."""
    return any(
        isinstance(pattern, str) and matches_domain(hostname, pattern)
        for pattern in allowed_domains
    )


def allowed_domains_of(license: Dict[str, Any]) -> Optional[list]:
    """The license's allowlist, or None when the claim is absent (unrestricted)."""
    domains = license.get("allowedDomains")
    if domains is None:
        return None
    return list(domains) if isinstance(domains, list) else []


def failure_reason(result: ValidationResult) -> str:
    """Accessor reason for a failed result."""
    return "expired" if result.error.code == ErrorCode.TOKEN_EXPIRED else "invalid_token"


def check_domain(result: ValidationResult, hostname: str) -> DomainCheckResult:
    """Classify a hostname against a validation result.

    Reasons, in priority order: invalid/expired token, no restrictions,
    empty allowlist, not in list.
    """
    if not result.valid:
        return DomainCheckResult(allowed=False, reason=failure_reason(result))

    allowed_domains = allowed_domains_of(result.license)
    if allowed_domains is None:
        return DomainCheckResult(allowed=True, reason="no_restrictions")

    if not allowed_domains:
        return DomainCheckResult(allowed=False, reason="empty_allowlist")

    if is_domain_allowed(hostname, allowed_domains):
        return DomainCheckResult(allowed=True)

    return DomainCheckResult(allowed=False, reason="domain_not_in_list")
