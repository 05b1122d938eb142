"""
Exception types for licensegate.

Expected validation failures are returned as results, never raised. The
exceptions below cover misconfiguration, key resolution and unwrapping a
failed bound result.
"""

from typing import Dict, Any, Optional


class LicenseGateException(Exception):
    """Base exception for licensegate."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(LicenseGateException):
    """Invalid validator configuration or public key input."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class PublicKeyFetchError(LicenseGateException):
    """Public key could not be retrieved from its URL."""

    def __init__(self, url: str, message: str = "Failed to fetch public key", details: Optional[Dict[str, Any]] = None):
        super().__init__("PUBLIC_KEY_FETCH_ERROR", f"{message} from {url}", details)


class LicenseUnavailableError(LicenseGateException):
    """The verified license was requested from a failed validation."""

    def __init__(self, message: str = "License is not available", details: Optional[Dict[str, Any]] = None):
        super().__init__("LICENSE_UNAVAILABLE", message, details)
