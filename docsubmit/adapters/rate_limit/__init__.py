"""Blocking fixed-window rate limiting.

``build_rate_limiter`` lives in ``factory`` and is not re-exported here,
because it depends on application settings.
"""

from docsubmit.adapters.rate_limit.admission_gate import AdmissionGate
from docsubmit.adapters.rate_limit.base import (
    AbstractBlockingRateLimiter,
    QuotaSnapshot,
    RateLimiterConfig,
    TimeUnit,
)
from docsubmit.adapters.rate_limit.fixed_window import FixedWindowRateLimiter
from docsubmit.adapters.rate_limit.scheduler import WindowScheduler

__all__ = [
    "AbstractBlockingRateLimiter",
    "AdmissionGate",
    "FixedWindowRateLimiter",
    "QuotaSnapshot",
    "RateLimiterConfig",
    "TimeUnit",
    "WindowScheduler",
]
