"""Rate limiter interfaces and configuration.

Callers depend on ``AbstractBlockingRateLimiter`` rather than a concrete
implementation, so the service layer stays unaware of how windows are
scheduled.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from docsubmit.core.errors import ErrorDetails, InvalidConfigurationError

REQUEST_LIMIT_ERROR = "Request limit must be a positive number."
WINDOW_DURATION_ERROR = "Window duration must be a positive number."


class TimeUnit(str, Enum):
    """Units accepted when a window is given as "count of unit"."""

    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"

    def to_timedelta(self, count: int = 1) -> timedelta:
        return timedelta(**{self.value: count})


@dataclass(frozen=True)
class RateLimiterConfig:
    """Immutable limiter configuration.

    Attributes:
        window: Length of one fixed window.
        limit: Permits granted per window.

    Raises:
        InvalidConfigurationError: If ``limit`` or ``window`` is not positive.
    """

    window: timedelta
    limit: int

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise InvalidConfigurationError(
                code="invalid_request_limit",
                message=REQUEST_LIMIT_ERROR,
                details=ErrorDetails(limit=self.limit),
            )
        if self.window <= timedelta(0):
            raise InvalidConfigurationError(
                code="invalid_window_duration",
                message=WINDOW_DURATION_ERROR,
                details=ErrorDetails(window_seconds=self.window.total_seconds()),
            )

    @classmethod
    def from_unit(cls, unit: TimeUnit | str, limit: int, count: int = 1) -> RateLimiterConfig:
        """Build a config whose window is ``count`` of ``unit``.

        Examples:
            >>> RateLimiterConfig.from_unit(TimeUnit.SECONDS, limit=3).window_seconds
            1.0
        """
        return cls(window=TimeUnit(unit).to_timedelta(count), limit=limit)

    @property
    def window_seconds(self) -> float:
        return self.window.total_seconds()


@dataclass(frozen=True)
class QuotaSnapshot:
    """Point-in-time view of a limiter's quota.

    Attributes:
        limit: Permits granted per window.
        available_permits: Permits left in the current window.
        window_start: UNIX time of the last reset, None before the first one.
        window_seconds: Window length in seconds.
        resets: Number of resets performed so far.
        waiting: Callers currently blocked waiting for a permit.
    """

    limit: int
    available_permits: int
    window_start: float | None
    window_seconds: float
    resets: int
    waiting: int = 0


class AbstractBlockingRateLimiter(ABC):
    """Interface for limiters whose ``acquire`` blocks until admitted."""

    @abstractmethod
    def acquire(self, timeout: float | None = None) -> bool:
        """Block until a permit for the current window is granted.

        Args:
            timeout: Maximum seconds to wait. None waits indefinitely.

        Returns:
            True once a permit is held, False if the timeout elapsed first.

        Raises:
            InterruptedWaitError: If the wait was interrupted externally.
        """
        raise NotImplementedError

    @abstractmethod
    def shutdown(self) -> None:
        """Stop replenishing permits. Safe to call more than once."""
        raise NotImplementedError

    @abstractmethod
    def snapshot(self) -> QuotaSnapshot:
        """Return the current quota state."""
        raise NotImplementedError

    def __enter__(self) -> AbstractBlockingRateLimiter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
