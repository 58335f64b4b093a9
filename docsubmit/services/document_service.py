"""Document submission service: rate-limited acquire-and-run.

Each call first takes a permit from the limiter, blocking until the current
window has room, and only then calls the submitter. Errors raised by the
submitter reach the caller unchanged; the permit is spent either way.
"""

from __future__ import annotations

import logging
import threading

from docsubmit.adapters.rate_limit.base import AbstractBlockingRateLimiter, QuotaSnapshot
from docsubmit.adapters.submitter.base import AbstractDocumentSubmitter
from docsubmit.schemas.document import Document

logger = logging.getLogger(__name__)


class DocumentService:
    """Submit documents without exceeding the configured rate."""

    def __init__(
        self,
        limiter: AbstractBlockingRateLimiter,
        submitter: AbstractDocumentSubmitter,
    ) -> None:
        self.limiter = limiter
        self.submitter = submitter
        self._closed = False
        self._close_lock = threading.Lock()

    def create_document(self, document: Document, signature: str) -> str:
        """Wait for admission, then submit ``document``.

        Args:
            document: Document to submit.
            signature: Authorization value for the downstream call.

        Returns:
            str: Raw response body from the submission endpoint.

        Raises:
            InterruptedWaitError: If the wait for a permit was interrupted.
            DownstreamCallFailedError: If the submission fails.
        """
        self.limiter.acquire()
        logger.debug(
            "document.admitted",
            extra={"doc_id": document.document_id, "doc_type": document.document_type},
        )
        return self.submitter.submit(document, signature)

    @property
    def is_running(self) -> bool:
        return not self._closed

    def rate_limit_status(self) -> QuotaSnapshot:
        return self.limiter.snapshot()

    def shutdown(self) -> None:
        """Stop the limiter and close the submitter. Idempotent."""
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self.limiter.shutdown()
        self.submitter.close()

    def __enter__(self) -> DocumentService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
