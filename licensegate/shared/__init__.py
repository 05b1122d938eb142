"""
Cross-cutting building blocks for licensegate.

- config: Library settings via pydantic-settings
- logging: Structured logging with validation context
- errors: Canonical exception types and error responses
- metrics: Prometheus counters for validation outcomes

Nothing in here may import from the validation packages to avoid import cycles.
"""
