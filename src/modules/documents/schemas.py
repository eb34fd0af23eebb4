"""Pydantic schemas for Documents module."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import Field, field_validator

from src.modules.documents.models import (
    CURRENCY_LENGTH,
    DOCUMENT_NUMBER_LENGTH,
    DOCUMENT_TYPE_LENGTH,
    INTERNAL_CODE_LENGTH,
    RUC_LENGTH,
)
from src.shared.schemas.base import BaseSchema
from src.shared.utils.money import parse_document_amount


# --- Submit Schemas ---


class DocumentInput(BaseSchema):
    """One document row as typed by the clerk. Blank fields are allowed."""

    client_ruc: str = Field("", max_length=RUC_LENGTH)
    provider_ruc: str = Field("", max_length=RUC_LENGTH)
    document_type: str = Field("", max_length=DOCUMENT_TYPE_LENGTH)
    document_number: str = Field("", max_length=DOCUMENT_NUMBER_LENGTH)
    internal_code: str | None = Field(None, max_length=INTERNAL_CODE_LENGTH)
    issue_date: date | None = None
    due_date: date | None = None
    confirmation_date: date | None = None
    amount: Decimal = Field(
        Decimal("0"),
        description="Blank or unparseable amounts are stored as 0; 1e14 or more is rejected",
    )
    currency: str = Field("", max_length=CURRENCY_LENGTH)

    @field_validator(
        "client_ruc", "provider_ruc", "document_type", "document_number", "currency",
        mode="before",
    )
    @classmethod
    def normalize_text(cls, v):
        if v is None:
            return ""
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("internal_code", mode="before")
    @classmethod
    def blank_code_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("issue_date", "due_date", "confirmation_date", mode="before")
    @classmethod
    def blank_date_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("amount", mode="before")
    @classmethod
    def lenient_amount(cls, v):
        return parse_document_amount(v)


class BatchSubmit(BaseSchema):
    """Schema for submitting a batch. An empty list is rejected by the service."""

    documents: list[DocumentInput] = Field(default_factory=list)


class SubmitResult(BaseSchema):
    """Outcome of a committed submit transaction."""

    batch_id: int
    business_date: date
    correlative: int
    file_name: str
    document_count: int
    total_amount: Decimal


# --- Read Schemas ---


class DocumentResponse(BaseSchema):
    """Schema for a stored document."""

    id: int
    batch_id: int
    correlative: int
    client_ruc: str
    provider_ruc: str
    document_type: str
    document_number: str
    internal_code: str | None
    issue_date: date | None
    due_date: date | None
    confirmation_date: date | None
    amount: Decimal
    currency: str
    file_name: str
    created_at: datetime


class BatchResponse(BaseSchema):
    """Schema for a batch (transaction summary)."""

    id: int
    business_date: date
    correlative: int
    file_name: str
    document_count: int
    total_amount: Decimal
    created_at: datetime


class BatchDetailResponse(BatchResponse):
    """Batch with its documents."""

    documents: list[DocumentResponse]


class HistoryFilters(BaseSchema):
    """Filters for listing documents or batches."""

    date_from: date | None = None
    date_to: date | None = None
    limit: int = Field(100, ge=1, le=500)
    offset: int = Field(0, ge=0)
