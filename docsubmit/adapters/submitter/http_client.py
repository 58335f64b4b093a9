"""HTTP document submitter adapter."""

from __future__ import annotations

import logging

import httpx

from docsubmit.adapters.submitter.base import AbstractDocumentSubmitter
from docsubmit.core.config import DEFAULT_SUBMITTER_URL
from docsubmit.core.errors import DownstreamCallFailedError
from docsubmit.schemas.document import Document

logger = logging.getLogger(__name__)

CONTENT_TYPE_JSON = "application/json"


class HttpDocumentSubmitter(AbstractDocumentSubmitter):
    """POSTs documents as JSON and returns the response body.

    Uses a synchronous ``httpx.Client``: callers already block on the rate
    limiter, so the submission runs on the same worker thread.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_SUBMITTER_URL,
        timeout_seconds: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the submitter.

        Args:
            api_url: Endpoint the documents are POSTed to.
            timeout_seconds: Timeout for each request in seconds.
            client: Optional pre-built client (tests, shared pools). An
                injected client is not closed by ``close()``.
        """
        self.api_url = api_url
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout_seconds)

    def submit(self, document: Document, signature: str) -> str:
        """Send ``document`` with ``signature`` as the Authorization header.

        Returns:
            str: Response body text for a 2xx response.

        Raises:
            DownstreamCallFailedError: On a non-2xx status or a transport error.
        """
        headers = {
            "Content-Type": CONTENT_TYPE_JSON,
            "Authorization": signature,
        }

        try:
            response = self.client.post(self.api_url, content=document.to_json(), headers=headers)
        except httpx.HTTPError as exc:
            logger.warning(
                "document.submit.unreachable",
                extra={"url": self.api_url, "error_type": type(exc).__name__},
            )
            raise DownstreamCallFailedError(
                code="downstream_unreachable",
                message=f"Document submission to {self.api_url} failed: {exc}",
                details={"url": self.api_url, "error_type": type(exc).__name__},
            ) from exc

        if not response.is_success:
            logger.warning(
                "document.submit.failed",
                extra={"url": str(response.url), "http_status": response.status_code},
            )
            raise DownstreamCallFailedError(
                code="downstream_call_failed",
                message=(
                    f"Unexpected code {response.status_code} {response.reason_phrase} "
                    f"for url {response.url}"
                ),
                details={"http_status": response.status_code, "url": str(response.url)},
            )

        logger.info(
            "document.submit.succeeded",
            extra={
                "http_status": response.status_code,
                "doc_id": document.document_id,
                "response_chars": len(response.text),
            },
        )
        return response.text

    def close(self) -> None:
        if self._owns_client:
            self.client.close()
