"""
Validator factories and the one-shot validation API.
"""

from typing import Awaitable, Callable, Optional

import httpx

from .config import ValidatorConfig
from .keys import resolve_public_key
from .revocation import RevocationChecker
from .shared.config import get_settings
from .shared.logging import get_logger
from .shared.metrics import ValidationMetrics, get_metrics
from .types import ValidationResult
from .validation import BoundValidator, UnboundValidator, ValidationContext

logger = get_logger("licensegate.validator")


async def build_context(
    realm: str,
    config: ValidatorConfig,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    metrics: Optional[ValidationMetrics] = None,
) -> ValidationContext:
    """Resolve the public key and wire up revocation for ``realm``.

    Raises:
        ConfigurationError: the public key is not in an accepted format.
        PublicKeyFetchError: the public key URL could not be fetched.
    """
    settings = get_settings()

    if metrics is None and settings.metrics_enabled:
        metrics = get_metrics()

    fail_open = config.revocation_fail_open
    if fail_open is None:
        fail_open = settings.revocation_fail_open

    public_key = await resolve_public_key(config.key_source, http_client)
    revocation = RevocationChecker(
        config.revocation_source,
        fail_open=fail_open,
        client=http_client,
        metrics=metrics,
    )

    logger.debug(
        "Validator context built",
        realm=realm,
        key_source=type(config.key_source).__name__,
        revocation_source=type(config.revocation_source).__name__ if config.revocation_source else None,
        revocation_fail_open=fail_open,
    )
    return ValidationContext(
        realm=realm,
        public_key=public_key,
        config=config,
        revocation=revocation,
        metrics=metrics,
    )


async def create_validator(
    realm: str,
    config: ValidatorConfig,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    metrics: Optional[ValidationMetrics] = None,
) -> UnboundValidator:
    """Create a reusable validator for tokens issued to ``realm``."""
    context = await build_context(realm, config, http_client=http_client, metrics=metrics)
    return UnboundValidator(context)


async def create_bound_validator(
    realm: str,
    config: ValidatorConfig,
    token: str,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    metrics: Optional[ValidationMetrics] = None,
) -> BoundValidator:
    """Create a validator and bind it to ``token`` in one step."""
    validator = await create_validator(realm, config, http_client=http_client, metrics=metrics)
    return await validator.bind(token)


async def validate_license(
    realm: str,
    token: str,
    config: ValidatorConfig,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    metrics: Optional[ValidationMetrics] = None,
) -> ValidationResult:
    """Validate a single token.

    Resolves the public key on every call; build a validator with
    :func:`create_validator` when validating more than once.
    """
    validator = await create_validator(realm, config, http_client=http_client, metrics=metrics)
    return await validator.validate(token)


async def validation_function(
    realm: str,
    config: ValidatorConfig,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    metrics: Optional[ValidationMetrics] = None,
) -> Callable[[str], Awaitable[ValidationResult]]:
    """Return ``validate`` of a freshly created validator as a plain callable."""
    validator = await create_validator(realm, config, http_client=http_client, metrics=metrics)
    return validator.validate
