"""Tests for DocumentService: rate-limited acquire-then-submit."""

from __future__ import annotations

import time
from unittest.mock import Mock

import pytest

from docsubmit.adapters.rate_limit.base import AbstractBlockingRateLimiter
from docsubmit.core.errors import DownstreamCallFailedError
from docsubmit.schemas.document import Document
from docsubmit.services.document_service import DocumentService


def test_create_document_returns_submitter_body(make_limiter, submitter: Mock, document: Document) -> None:
    service = DocumentService(limiter=make_limiter(limit=10), submitter=submitter)

    response = service.create_document(document, "Bearer test-token")

    assert response == "success"
    submitter.submit.assert_called_once_with(document, "Bearer test-token")


def test_fourth_request_waits_for_next_window(submitter: Mock, document: Document, make_limiter) -> None:
    start = time.monotonic()
    service = DocumentService(limiter=make_limiter(limit=3, window_seconds=1.0), submitter=submitter)

    for _ in range(3):
        service.create_document(document, "sig")
    assert submitter.submit.call_count == 3
    assert time.monotonic() - start < 0.5

    service.create_document(document, "sig")

    assert time.monotonic() - start >= 1.0
    assert submitter.submit.call_count == 4


def test_request_after_window_passes(submitter: Mock, document: Document, make_limiter) -> None:
    service = DocumentService(limiter=make_limiter(limit=3, window_seconds=1.0), submitter=submitter)

    for _ in range(3):
        service.create_document(document, "sig")
    time.sleep(1.0)

    start = time.monotonic()
    service.create_document(document, "sig")

    assert time.monotonic() - start < 0.1
    assert submitter.submit.call_count == 4


def test_downstream_error_propagates_and_permit_is_spent(
    submitter: Mock, document: Document, make_limiter
) -> None:
    limiter = make_limiter(limit=2, window_seconds=10.0)
    submitter.submit.side_effect = DownstreamCallFailedError(
        code="downstream_call_failed",
        message="Unexpected code 400 Bad Request for url https://submit.test",
    )
    service = DocumentService(limiter=limiter, submitter=submitter)

    with pytest.raises(DownstreamCallFailedError):
        service.create_document(document, "sig")

    assert limiter.snapshot().available_permits == 1
    assert submitter.submit.call_count == 1


def test_submit_not_called_when_acquire_fails(submitter: Mock, document: Document) -> None:
    limiter = Mock(spec=AbstractBlockingRateLimiter)
    limiter.acquire.side_effect = RuntimeError("interrupted")
    service = DocumentService(limiter=limiter, submitter=submitter)

    with pytest.raises(RuntimeError):
        service.create_document(document, "sig")

    submitter.submit.assert_not_called()


def test_shutdown_is_idempotent(submitter: Mock) -> None:
    limiter = Mock(spec=AbstractBlockingRateLimiter)
    service = DocumentService(limiter=limiter, submitter=submitter)

    service.shutdown()
    service.shutdown()

    limiter.shutdown.assert_called_once()
    submitter.close.assert_called_once()
    assert service.is_running is False


def test_context_manager(submitter: Mock) -> None:
    limiter = Mock(spec=AbstractBlockingRateLimiter)

    with DocumentService(limiter=limiter, submitter=submitter) as service:
        assert service.is_running

    limiter.shutdown.assert_called_once()
