"""Pydantic schemas for documents sent to the submission endpoint.

Field aliases are the downstream wire names. Models accept either the
Python names or the aliases on input and always dump with aliases.
"""

from pydantic import BaseModel, ConfigDict, Field


class Description(BaseModel):
    """Document description block."""

    model_config = ConfigDict(populate_by_name=True)

    participant_inn: str | None = Field(None, alias="participantInn")


class Product(BaseModel):
    """A single product line in a document."""

    certificate_document: str | None = None
    certificate_document_date: str | None = None
    certificate_document_number: str | None = None
    owner_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    tnved_code: str | None = None
    uit_code: str | None = None
    uitu_code: str | None = None


class Document(BaseModel):
    """Document submitted for registration.

    Dates are passed through as strings; the downstream endpoint owns their
    format.
    """

    model_config = ConfigDict(populate_by_name=True)

    description: Description | None = None
    document_id: str | None = Field(None, alias="doc_id")
    document_status: str | None = Field(None, alias="doc_status")
    document_type: str | None = Field(None, alias="doc_type")
    import_request: bool = Field(False, alias="importRequest")
    owner_inn: str | None = None
    participant_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    production_type: str | None = None
    products: list[Product] = Field(default_factory=list)
    registration_date: str | None = Field(None, alias="reg_date")
    registration_number: str | None = Field(None, alias="reg_number")

    def to_json(self) -> str:
        """Serialize with wire names, omitting unset optional fields.

        Fields left as None are dropped rather than sent as ``null``.
        """
        return self.model_dump_json(by_alias=True, exclude_none=True)
