"""
licensegate - offline validation of signed license tokens.

    validator = await create_validator(
        "app1",
        ValidatorConfig.create(public_key=PUBLIC_KEY_HEX, required_flags=["export"]),
    )
    result = await validator.validate(token)
    if result.valid:
        ...
"""

from .config import (
    RemotePublicKey,
    RemoteRevocation,
    StaticPublicKey,
    StaticRevocation,
    TimingOptions,
    ValidatorConfig,
)
from .constants import ISSUER, SUPPORTED_VERSIONS
from .domain import check_domain, is_domain_allowed, matches_domain
from .keys import normalize_public_key
from .shared.errors import (
    ConfigurationError,
    LicenseGateException,
    LicenseUnavailableError,
    PublicKeyFetchError,
)
from .shared.logging import configure_logging
from .timeutil import compute_expiration_info
from .tokens import decode, decode_payload
from .types import (
    DomainCheckResult,
    ErrorCode,
    ExpirationInfo,
    FlagCheckResult,
    LicenseError,
    LicenseWarning,
    RevocationList,
    ValidationFailure,
    ValidationResult,
    ValidationSuccess,
    WarningCode,
)
from .validation import BoundValidator, UnboundValidator
from .validator import (
    create_bound_validator,
    create_validator,
    validate_license,
    validation_function,
)

__version__ = "1.0.0"

__all__ = [
    "BoundValidator",
    "ConfigurationError",
    "DomainCheckResult",
    "ErrorCode",
    "ExpirationInfo",
    "FlagCheckResult",
    "ISSUER",
    "LicenseError",
    "LicenseGateException",
    "LicenseUnavailableError",
    "LicenseWarning",
    "PublicKeyFetchError",
    "RemotePublicKey",
    "RemoteRevocation",
    "RevocationList",
    "SUPPORTED_VERSIONS",
    "StaticPublicKey",
    "StaticRevocation",
    "TimingOptions",
    "UnboundValidator",
    "ValidationFailure",
    "ValidationResult",
    "ValidationSuccess",
    "ValidatorConfig",
    "WarningCode",
    "check_domain",
    "compute_expiration_info",
    "configure_logging",
    "create_bound_validator",
    "create_validator",
    "decode",
    "decode_payload",
    "is_domain_allowed",
    "matches_domain",
    "normalize_public_key",
    "validate_license",
    "validation_function",
]
