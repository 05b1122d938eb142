"""
Unit tests for validator configuration.
"""

import pytest

from licensegate.config import (
    RemotePublicKey,
    RemoteRevocation,
    StaticPublicKey,
    StaticRevocation,
    TimingOptions,
    ValidatorConfig,
)
from licensegate.shared.config import LicenseGateSettings
from licensegate.shared.errors import ConfigurationError
from licensegate.types import RevocationList


class TestValidatorConfig:
    """Test cases for ValidatorConfig."""

    def test_defaults(self, key_pair):
        """Test default policy."""
        config = ValidatorConfig.create(public_key=key_pair.public_hex)

        assert config.key_source == StaticPublicKey(key_pair.public_hex)
        assert config.revocation_source is None
        assert config.required_flags == ()
        assert config.required_kind is None
        assert config.timing == TimingOptions(clock_skew=60, current_time=None)
        assert config.allow_no_expiration is False
        assert config.revocation_fail_open is None

    def test_requires_exactly_one_key_source(self, key_pair):
        """Test both and neither key sources are rejected."""
        with pytest.raises(ConfigurationError):
            ValidatorConfig.create()
        with pytest.raises(ConfigurationError):
            ValidatorConfig.create(public_key=key_pair.public_hex, public_key_url="https://k.example.org")

    def test_at_most_one_revocation_source(self, key_pair):
        """Test inline and URL revocation together are rejected."""
        with pytest.raises(ConfigurationError):
            ValidatorConfig.create(
                public_key=key_pair.public_hex,
                revocation={"jti": ["a"]},
                revocation_url="https://r.example.org",
            )

    def test_revocation_from_mapping(self, key_pair):
        """Test a plain dict revocation list is coerced."""
        config = ValidatorConfig.create(public_key=key_pair.public_hex, revocation={"jti": ["a"], "extra": 1})

        assert config.revocation_source == StaticRevocation(RevocationList(jti=["a"]))

    def test_invalid_revocation_list(self, key_pair):
        """Test a malformed revocation list."""
        with pytest.raises(ConfigurationError):
            ValidatorConfig.create(public_key=key_pair.public_hex, revocation={"jti": "not-a-list"})

    def test_negative_skew(self, key_pair):
        """Test negative clock skew."""
        with pytest.raises(ConfigurationError):
            ValidatorConfig.create(public_key=key_pair.public_hex, clock_skew=-1)

    def test_direct_construction_checks_source_type(self):
        """Test the tagged variant is enforced."""
        with pytest.raises(ConfigurationError):
            ValidatorConfig(key_source="raw-key")

    def test_is_immutable(self, config):
        """Test frozen config."""
        with pytest.raises(AttributeError):
            config.required_kind = "pro"

    def test_from_dict(self):
        """Test the camelCase configuration object."""
        config = ValidatorConfig.from_dict({
            "publicKeyUrl": "https://k.example.org/key",
            "revocationUrl": "https://r.example.org/list",
            "requiredFlags": ["export"],
            "requiredKind": "pro",
            "requiredFeatures": ["seats"],
            "timing": {"clockSkew": 30, "currentTime": 1_700_000_000},
            "allowNoExpiration": True,
            "revocationFailOpen": False,
        })

        assert config.key_source == RemotePublicKey("https://k.example.org/key")
        assert config.revocation_source == RemoteRevocation("https://r.example.org/list")
        assert config.required_flags == ("export",)
        assert config.required_kind == "pro"
        assert config.required_features == ("seats",)
        assert config.timing == TimingOptions(clock_skew=30, current_time=1_700_000_000)
        assert config.allow_no_expiration is True
        assert config.revocation_fail_open is False


class TestLicenseGateSettings:
    """Test cases for environment settings."""

    def test_defaults(self, monkeypatch):
        """Test default values."""
        monkeypatch.delenv("LICENSEGATE_METRICS_ENABLED", raising=False)

        settings = LicenseGateSettings(_env_file=None)

        assert settings.log_level == "info"
        assert settings.log_json is True
        assert settings.http_timeout is None
        assert settings.revocation_fail_open is True
        assert settings.metrics_enabled is True

    def test_environment_overrides(self, monkeypatch):
        """Test LICENSEGATE_ prefixed variables."""
        monkeypatch.setenv("LICENSEGATE_HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("LICENSEGATE_REVOCATION_FAIL_OPEN", "false")

        settings = LicenseGateSettings(_env_file=None)

        assert settings.http_timeout == 2.5
        assert settings.revocation_fail_open is False
