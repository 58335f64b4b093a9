"""Factory for creating the document submitter from settings."""

from docsubmit.adapters.submitter.base import AbstractDocumentSubmitter
from docsubmit.adapters.submitter.http_client import HttpDocumentSubmitter
from docsubmit.core.config import SubmitterSettings, settings


def create_document_submitter(
    submitter_settings: SubmitterSettings | None = None,
) -> AbstractDocumentSubmitter:
    """Instantiate the HTTP document submitter.

    Args:
        submitter_settings: Endpoint settings; defaults to the global settings.

    Returns:
        AbstractDocumentSubmitter: Submitter owning its own HTTP client.
    """
    cfg = submitter_settings or settings.submitter
    return HttpDocumentSubmitter(
        api_url=cfg.api_url,
        timeout_seconds=cfg.timeout_seconds,
    )
