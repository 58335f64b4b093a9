"""Document submitter adapters - the HTTP collaborator behind the limiter."""

from docsubmit.adapters.submitter.base import AbstractDocumentSubmitter
from docsubmit.adapters.submitter.factory import create_document_submitter
from docsubmit.adapters.submitter.http_client import HttpDocumentSubmitter

__all__ = [
    "AbstractDocumentSubmitter",
    "HttpDocumentSubmitter",
    "create_document_submitter",
]
