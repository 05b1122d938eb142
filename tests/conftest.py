"""
Shared fixtures for licensegate tests.
"""

import pytest
from prometheus_client import CollectorRegistry

from licensegate.config import ValidatorConfig
from licensegate.shared.config import get_settings
from licensegate.shared.metrics import ValidationMetrics

from tests.helpers import KeyPair, LicenseTokenFactory


@pytest.fixture
def key_pair():
    """Ed25519 key pair used for signing."""
    return KeyPair()


@pytest.fixture
def other_key_pair():
    """Key pair unrelated to the validator's key."""
    return KeyPair()


@pytest.fixture
def token_factory(key_pair):
    """Token factory signing with ``key_pair``."""
    return LicenseTokenFactory(key_pair)


@pytest.fixture
def config(key_pair):
    """Minimal config with a static hex key."""
    return ValidatorConfig.create(public_key=key_pair.public_hex)


@pytest.fixture
def metrics():
    """Metrics on an isolated registry."""
    return ValidationMetrics(registry=CollectorRegistry())


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Keep metrics off the global registry and reset cached settings."""
    monkeypatch.setenv("LICENSEGATE_METRICS_ENABLED", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
