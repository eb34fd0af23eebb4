"""Pydantic schemas for document drafts."""

from pydantic import Field

from src.shared.schemas.base import BaseSchema


class DraftRow(BaseSchema):
    """A grid row exactly as typed; validated only when the batch is submitted."""

    id: str = Field(..., min_length=1, max_length=64)
    client_ruc: str = Field("", max_length=50)
    provider_ruc: str = Field("", max_length=50)
    document_type: str = Field("", max_length=50)
    document_number: str = Field("", max_length=100)
    internal_code: str = Field("", max_length=100)
    issue_date: str = Field("", max_length=20)
    due_date: str = Field("", max_length=20)
    confirmation_date: str = Field("", max_length=20)
    amount: str = Field("", max_length=50)
    currency: str = Field("", max_length=20)


class DraftsReplace(BaseSchema):
    """Full grid contents in display order."""

    rows: list[DraftRow] = Field(default_factory=list, max_length=1000)
