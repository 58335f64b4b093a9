"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any import of ``docsubmit`` so the
settings object is built from test values, not from a developer's .env file.
"""

import os

# Must run before any import that loads settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("RATE_LIMIT_REQUEST_LIMIT", "5")
os.environ.setdefault("RATE_LIMIT_WINDOW_UNIT", "seconds")
os.environ.setdefault("RATE_LIMIT_WINDOW_COUNT", "1")
os.environ.setdefault("SUBMITTER_API_URL", "https://submit.test/api/v3/lk/documents/create")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402

from docsubmit.adapters.rate_limit.fixed_window import FixedWindowRateLimiter  # noqa: E402
from docsubmit.adapters.submitter.base import AbstractDocumentSubmitter  # noqa: E402
from docsubmit.schemas.document import Document  # noqa: E402


@pytest.fixture
def make_limiter():
    """Build limiters that are always shut down after the test."""
    created: list[FixedWindowRateLimiter] = []

    def _make(limit: int, window_seconds: float = 1.0) -> FixedWindowRateLimiter:
        limiter = FixedWindowRateLimiter.create(limit=limit, window_seconds=window_seconds)
        created.append(limiter)
        return limiter

    yield _make

    for limiter in created:
        # Release anything a failed test left waiting.
        limiter.interrupt_waiters()
        limiter.shutdown()


@pytest.fixture
def submitter() -> Mock:
    mock = Mock(spec=AbstractDocumentSubmitter)
    mock.submit.return_value = "success"
    return mock


@pytest.fixture
def document() -> Document:
    return Document(
        document_id="123",
        document_type="LP_INTRODUCE_GOODS",
        owner_inn="7701234567",
        products=[{"uit_code": "010461111111111121", "tnved_code": "6401100000"}],
    )
