"""
Unix-seconds time helpers used by timing checks and expiration accessors.
"""

import math
import time
from typing import Optional

from .constants import EXPIRING_SOON_THRESHOLD
from .types import ExpirationInfo


def now() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())


def format_duration(seconds: float) -> str:
    """Render a duration as its largest whole unit, e.g. ``"3 hours"``."""
    seconds = int(abs(seconds))

    if seconds < 60:
        value, unit = seconds, "second"
    elif seconds < 3600:
        value, unit = seconds // 60, "minute"
    elif seconds < 86400:
        value, unit = seconds // 3600, "hour"
    else:
        value, unit = seconds // 86400, "day"

    return f"{value} {unit}{'' if value == 1 else 's'}"


def is_expiring_soon(exp: float, current_time: float, threshold: int = EXPIRING_SOON_THRESHOLD) -> bool:
    remaining = exp - current_time
    return 0 < remaining <= threshold


def compute_expiration_info(exp: Optional[float], current_time: Optional[int] = None) -> ExpirationInfo:
    """Describe expiration of ``exp`` relative to ``current_time`` (defaults to now).

    No clock skew is applied: this reports the raw claim. A missing, non-numeric
    or non-finite ``exp`` yields an info with every field unset.
    """
    if isinstance(exp, bool) or not isinstance(exp, (int, float)) or not math.isfinite(exp):
        return ExpirationInfo(expires_at=None, is_expired=False, seconds_remaining=None, time_remaining=None)

    current = now() if current_time is None else current_time
    remaining = int(exp - current)
    return ExpirationInfo(
        expires_at=int(exp),
        is_expired=remaining < 0,
        seconds_remaining=remaining,
        time_remaining=format_duration(remaining) if remaining >= 0 else "expired",
    )
