"""Factory for the process's document-submission rate limiter."""

from docsubmit.adapters.rate_limit.base import RateLimiterConfig
from docsubmit.adapters.rate_limit.fixed_window import FixedWindowRateLimiter
from docsubmit.core.config import RateLimitSettings, settings


def build_rate_limiter(rate_limit_settings: RateLimitSettings | None = None) -> FixedWindowRateLimiter:
    """Build and start a limiter from configuration.

    Args:
        rate_limit_settings: Limiter settings; defaults to the global settings.

    Returns:
        FixedWindowRateLimiter: Running limiter. The caller owns its shutdown.

    Raises:
        InvalidConfigurationError: If the configured limit or window is not positive.
    """
    cfg = rate_limit_settings or settings.rate_limit
    config = RateLimiterConfig.from_unit(
        cfg.window_unit,
        limit=cfg.request_limit,
        count=cfg.window_count,
    )
    return FixedWindowRateLimiter(config)
