"""
Unit tests for errors, metrics and logging helpers.
"""

import logging

import pytest
import structlog
from prometheus_client import CollectorRegistry

from licensegate.shared.errors import (
    ConfigurationError,
    LicenseGateException,
    LicenseUnavailableError,
    PublicKeyFetchError,
)
from licensegate.shared.logging import (
    add_component_context,
    add_realm_context,
    configure_logging,
    get_logger,
    realm_context,
)
from licensegate.shared.metrics import ValidationMetrics


class TestErrors:
    """Test cases for exception types."""

    def test_code_message_details(self):
        """Test the fields carried by every exception."""
        error = ConfigurationError("bad key", details={"length": 31})

        assert error.code == "CONFIGURATION_ERROR"
        assert error.message == "bad key"
        assert str(error) == "bad key"
        assert error.details == {"length": 31}

    def test_hierarchy(self):
        """Test every exception derives from the base."""
        for error in (ConfigurationError(), PublicKeyFetchError("https://k"), LicenseUnavailableError()):
            assert isinstance(error, LicenseGateException)

    def test_public_key_fetch_error_message(self):
        """Test the URL is part of the message."""
        error = PublicKeyFetchError("https://k.example.org")

        assert str(error) == "Failed to fetch public key from https://k.example.org"
        assert error.details == {}


class TestValidationMetrics:
    """Test cases for ValidationMetrics."""

    @pytest.fixture
    def registry(self):
        """Isolated registry."""
        return CollectorRegistry()

    def test_record_validation(self, registry):
        """Test validation counters and histogram."""
        metrics = ValidationMetrics(registry=registry)

        metrics.record_validation("failure", "TOKEN_EXPIRED", 0.002)
        metrics.record_validation("failure", "TOKEN_EXPIRED", 0.003)

        assert registry.get_sample_value(
            "licensegate_validations_total",
            {"outcome": "failure", "code": "TOKEN_EXPIRED"},
        ) == 2
        assert registry.get_sample_value(
            "licensegate_validation_duration_seconds_count",
            {"outcome": "failure"},
        ) == 2

    def test_record_revocation_fetch_failure(self, registry):
        """Test revocation failure counter."""
        metrics = ValidationMetrics(registry=registry)

        metrics.record_revocation_fetch_failure("fail_open")

        assert registry.get_sample_value(
            "licensegate_revocation_fetch_failures_total",
            {"reason": "fail_open"},
        ) == 1


class TestLoggingProcessors:
    """Test cases for structlog processors."""

    def test_component_context(self):
        """Test component taken from the logger name."""
        event = add_component_context(None, "info", {"logger": "licensegate.revocation"})

        assert event["component"] == "revocation"

    def test_realm_context(self):
        """Test realm attached only inside the block."""
        with realm_context("app1"):
            assert add_realm_context(None, "info", {})["realm"] == "app1"

        assert "realm" not in add_realm_context(None, "info", {})

    def test_configure_logging_from_settings(self, monkeypatch, caplog):
        """Test the renderer defaults to the environment settings."""
        from licensegate.shared.config import get_settings

        monkeypatch.setenv("LICENSEGATE_LOG_JSON", "true")
        get_settings.cache_clear()
        caplog.set_level(logging.DEBUG)

        try:
            configure_logging()
            get_logger("licensegate.test").warning("configured", answer=42)
        finally:
            structlog.reset_defaults()

        assert '"event": "configured"' in caplog.text
        assert '"component": "test"' in caplog.text
