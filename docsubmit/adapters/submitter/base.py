from abc import ABC, abstractmethod

from docsubmit.schemas.document import Document


class AbstractDocumentSubmitter(ABC):
	"""Interface for clients that deliver a document downstream."""

	@abstractmethod
	def submit(self, document: Document, signature: str) -> str:
		"""Send one document and return the raw response body.

		Args:
			document: Document to serialize and send.
			signature: Value forwarded as the Authorization header.

		Returns:
			str: Response body text.

		Raises:
			DownstreamCallFailedError: If the call does not succeed.
		"""
		...

	def close(self) -> None:
		"""Release network resources held by the submitter."""
