from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Liveness check.

    Reports whether the document service (and with it the window scheduler)
    is still running. Runs on the event loop and never waits on the rate
    limiter, so it answers even while submissions are blocked.

    Returns:
        dict: ``{"status": "ok", "document_service": "running" | "stopped"}``.
    """
    service = getattr(request.app.state, "document_service", None)
    state = "running" if service is not None and service.is_running else "stopped"
    return {"status": "ok", "document_service": state}
