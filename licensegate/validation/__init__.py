"""
Validation pipeline and its two front-ends.
"""

from .bound import BoundValidator
from .pipeline import ValidationContext, validate_token
from .unbound import UnboundValidator

__all__ = ["BoundValidator", "UnboundValidator", "ValidationContext", "validate_token"]
