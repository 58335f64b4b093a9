"""Pydantic schemas for the HTTP API responses."""

from pydantic import BaseModel, Field


class DocumentSubmissionResponse(BaseModel):
    """Result of a successful document submission."""

    response: str = Field(
        ...,
        description="Raw response body returned by the submission endpoint.",
    )


class RateLimitStatusResponse(BaseModel):
    """Current state of the submission rate limiter."""

    limit: int = Field(..., description="Documents admitted per window.")
    available_permits: int = Field(..., description="Permits left in the current window.")
    window_seconds: float = Field(..., description="Window length in seconds.")
    window_start: float | None = Field(
        None,
        description="UNIX time the current window started; null before the first window.",
    )
    resets: int = Field(..., description="Windows opened since startup.")
    waiting: int = Field(..., description="Submissions currently waiting for a permit.")
