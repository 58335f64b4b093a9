from typing import Annotated

import anyio
import anyio.to_thread
from fastapi import APIRouter, Depends, Header, Request

from docsubmit.schemas.document import Document
from docsubmit.schemas.submission import DocumentSubmissionResponse, RateLimitStatusResponse
from docsubmit.services.document_service import DocumentService

router = APIRouter(tags=["Documents"])


def get_document_service(request: Request) -> DocumentService:
    """Return the service created for this app instance."""
    return request.app.state.document_service


def get_submission_capacity(request: Request) -> anyio.CapacityLimiter:
    """Return the thread budget reserved for blocking submissions."""
    return request.app.state.submission_capacity


@router.post("/documents", response_model=DocumentSubmissionResponse)
async def create_document(
    document: Document,
    signature: Annotated[str, Header(alias="X-Signature", min_length=1)],
    service: Annotated[DocumentService, Depends(get_document_service)],
    capacity: Annotated[anyio.CapacityLimiter, Depends(get_submission_capacity)],
) -> DocumentSubmissionResponse:
    """Submit a document, waiting for a rate limit permit first.

    ``DocumentService.create_document`` blocks its thread until a permit is
    granted, so it runs on worker threads drawn from ``capacity`` rather
    than the default threadpool shared with the other endpoints.

    The X-Signature header is forwarded downstream as ``Authorization``.

    Raises:
        DownstreamCallFailedError: Rendered as 502 by the global handlers.
    """
    body = await anyio.to_thread.run_sync(
        service.create_document, document, signature, limiter=capacity
    )
    return DocumentSubmissionResponse(response=body)


@router.get("/rate-limit", response_model=RateLimitStatusResponse)
async def rate_limit_status(
    service: Annotated[DocumentService, Depends(get_document_service)],
) -> RateLimitStatusResponse:
    snapshot = service.rate_limit_status()
    return RateLimitStatusResponse(
        limit=snapshot.limit,
        available_permits=snapshot.available_permits,
        window_seconds=snapshot.window_seconds,
        window_start=snapshot.window_start,
        resets=snapshot.resets,
        waiting=snapshot.waiting,
    )
