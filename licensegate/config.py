"""
Validator configuration.

The key source and the revocation source are tagged variants: a config holds
exactly one key source and at most one revocation source, checked once when
the config is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from .constants import DEFAULT_CLOCK_SKEW
from .shared.errors import ConfigurationError
from .types import RevocationList


@dataclass(frozen=True)
class StaticPublicKey:
    """Public key supplied inline as raw bytes, hex or base64 text."""

    key: Union[str, bytes]


@dataclass(frozen=True)
class RemotePublicKey:
    """Public key fetched once, as plaintext, when the validator is created."""

    url: str


KeySource = Union[StaticPublicKey, RemotePublicKey]


@dataclass(frozen=True)
class StaticRevocation:
    """Revocation list supplied inline."""

    revocation_list: RevocationList


@dataclass(frozen=True)
class RemoteRevocation:
    """Revocation list fetched fresh on every validation."""

    url: str


RevocationSource = Union[StaticRevocation, RemoteRevocation]


@dataclass(frozen=True)
class TimingOptions:
    """Clock tolerance and an optional fixed "now" (unix seconds) for tests."""

    clock_skew: int = DEFAULT_CLOCK_SKEW
    current_time: Optional[int] = None


@dataclass(frozen=True)
class ValidatorConfig:
    """Immutable validation policy."""

    key_source: KeySource
    revocation_source: Optional[RevocationSource] = None
    required_flags: Tuple[str, ...] = ()
    required_kind: Optional[str] = None
    required_features: Tuple[str, ...] = ()
    timing: TimingOptions = field(default_factory=TimingOptions)
    allow_no_expiration: bool = False
    # None defers to LicenseGateSettings.revocation_fail_open
    revocation_fail_open: Optional[bool] = None

    def __post_init__(self) -> None:
        if not isinstance(self.key_source, (StaticPublicKey, RemotePublicKey)):
            raise ConfigurationError(
                "key_source must be StaticPublicKey or RemotePublicKey",
                details={"type": type(self.key_source).__name__}
            )
        if self.revocation_source is not None and not isinstance(
            self.revocation_source, (StaticRevocation, RemoteRevocation)
        ):
            raise ConfigurationError(
                "revocation_source must be StaticRevocation or RemoteRevocation",
                details={"type": type(self.revocation_source).__name__}
            )
        if self.timing.clock_skew < 0:
            raise ConfigurationError("clock_skew must not be negative")

    @classmethod
    def create(
        cls,
        *,
        public_key: Union[str, bytes, None] = None,
        public_key_url: Optional[str] = None,
        revocation: Union[RevocationList, Mapping[str, Any], None] = None,
        revocation_url: Optional[str] = None,
        required_flags: Optional[Iterable[str]] = None,
        required_kind: Optional[str] = None,
        required_features: Optional[Iterable[str]] = None,
        clock_skew: Optional[int] = None,
        current_time: Optional[int] = None,
        allow_no_expiration: bool = False,
        revocation_fail_open: Optional[bool] = None,
    ) -> "ValidatorConfig":
        """Build a config from keyword options, enforcing the source rules."""
        if (public_key is None) == (public_key_url is None):
            raise ConfigurationError("Exactly one of public_key or public_key_url must be provided")
        if revocation is not None and revocation_url is not None:
            raise ConfigurationError("At most one of revocation or revocation_url may be provided")

        key_source: KeySource
        if public_key is not None:
            key_source = StaticPublicKey(public_key)
        else:
            key_source = RemotePublicKey(public_key_url)

        revocation_source: Optional[RevocationSource] = None
        if revocation is not None:
            revocation_source = StaticRevocation(_coerce_revocation_list(revocation))
        elif revocation_url is not None:
            revocation_source = RemoteRevocation(revocation_url)

        return cls(
            key_source=key_source,
            revocation_source=revocation_source,
            required_flags=tuple(required_flags or ()),
            required_kind=required_kind,
            required_features=tuple(required_features or ()),
            timing=TimingOptions(
                clock_skew=DEFAULT_CLOCK_SKEW if clock_skew is None else clock_skew,
                current_time=current_time,
            ),
            allow_no_expiration=allow_no_expiration,
            revocation_fail_open=revocation_fail_open,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValidatorConfig":
        """Build a config from the camelCase configuration object.

        Recognized keys: ``publicKey``, ``publicKeyUrl``, ``revocation``,
        ``revocationUrl``, ``requiredFlags``, ``requiredKind``,
        ``requiredFeatures``, ``timing`` (``clockSkew``, ``currentTime``),
        ``allowNoExpiration`` and ``revocationFailOpen``.
        """
        timing = data.get("timing") or {}
        return cls.create(
            public_key=data.get("publicKey"),
            public_key_url=data.get("publicKeyUrl"),
            revocation=data.get("revocation"),
            revocation_url=data.get("revocationUrl"),
            required_flags=data.get("requiredFlags"),
            required_kind=data.get("requiredKind"),
            required_features=data.get("requiredFeatures"),
            clock_skew=timing.get("clockSkew"),
            current_time=timing.get("currentTime"),
            allow_no_expiration=bool(data.get("allowNoExpiration", False)),
            revocation_fail_open=data.get("revocationFailOpen"),
        )


def _coerce_revocation_list(value: Union[RevocationList, Mapping[str, Any]]) -> RevocationList:
    if isinstance(value, RevocationList):
        return value
    try:
        return RevocationList.model_validate(dict(value))
    except (PydanticValidationError, TypeError, ValueError) as exc:
        raise ConfigurationError("Invalid revocation list", details={"error": str(exc)}) from exc
