"""
Prometheus metrics for license validation.
"""

import threading
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, REGISTRY


class ValidationMetrics:
    """Counters and histograms describing validation outcomes."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else REGISTRY

        self.validations_total = Counter(
            "licensegate_validations_total",
            "Total license validations",
            ["outcome", "code"],
            registry=self.registry
        )

        self.validation_duration_seconds = Histogram(
            "licensegate_validation_duration_seconds",
            "License validation duration in seconds",
            ["outcome"],
            registry=self.registry
        )

        self.revocation_fetch_failures_total = Counter(
            "licensegate_revocation_fetch_failures_total",
            "Revocation list fetches that failed and were skipped",
            ["reason"],
            registry=self.registry
        )

    def record_validation(self, outcome: str, code: str, duration: float) -> None:
        """Record one completed validation."""
        self.validations_total.labels(outcome=outcome, code=code).inc()
        self.validation_duration_seconds.labels(outcome=outcome).observe(duration)

    def record_revocation_fetch_failure(self, reason: str) -> None:
        """Record a revocation list fetch that failed."""
        self.revocation_fetch_failures_total.labels(reason=reason).inc()


_default_metrics: Optional[ValidationMetrics] = None
_default_lock = threading.Lock()


def get_metrics() -> ValidationMetrics:
    """Return the process-wide metrics instance registered on the default registry."""
    global _default_metrics
    with _default_lock:
        if _default_metrics is None:
            _default_metrics = ValidationMetrics()
        return _default_metrics
