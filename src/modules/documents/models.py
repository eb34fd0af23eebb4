"""DocumentBatch and AccountingDocument models."""

from datetime import date
from decimal import Decimal

from sqlalchemy import (
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.core.database.base import Base, BigIntPK, CreatedAtMixin

# Column widths shared by the input schemas and the fixed-width export.
RUC_LENGTH = 11
DOCUMENT_TYPE_LENGTH = 2
DOCUMENT_NUMBER_LENGTH = 25
INTERNAL_CODE_LENGTH = 50
CURRENCY_LENGTH = 2


class DocumentBatch(CreatedAtMixin, Base):
    """
    Transaction summary - one row per submitted batch.

    Written in the same transaction as the correlative counter update and the
    batch documents, never updated afterwards.
    """

    __tablename__ = "document_batches"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)

    business_date: Mapped[date] = mapped_column(
        Date,
        ForeignKey("correlative_counters.business_date"),
        nullable=False,
        index=True,
    )
    correlative: Mapped[int] = mapped_column(Integer, nullable=False)
    file_name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)

    document_count: Mapped[int] = mapped_column(Integer, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)

    # Relationships
    documents: Mapped[list["AccountingDocument"]] = relationship(
        "AccountingDocument",
        back_populates="batch",
        order_by="AccountingDocument.id",
    )

    __table_args__ = (
        UniqueConstraint("business_date", "correlative", name="uq_document_batch_date_correlative"),
    )


class AccountingDocument(CreatedAtMixin, Base):
    """An invoice or receipt line of a batch. Immutable once stored."""

    __tablename__ = "accounting_documents"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)

    batch_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("document_batches.id"), nullable=False, index=True
    )
    correlative: Mapped[int] = mapped_column(Integer, nullable=False)

    client_ruc: Mapped[str] = mapped_column(String(RUC_LENGTH), nullable=False, index=True)
    provider_ruc: Mapped[str] = mapped_column(String(RUC_LENGTH), nullable=False)
    document_type: Mapped[str] = mapped_column(String(DOCUMENT_TYPE_LENGTH), nullable=False)
    document_number: Mapped[str] = mapped_column(String(DOCUMENT_NUMBER_LENGTH), nullable=False)
    internal_code: Mapped[str | None] = mapped_column(String(INTERNAL_CODE_LENGTH), nullable=True)

    issue_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    confirmation_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    amount: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)
    currency: Mapped[str] = mapped_column(String(CURRENCY_LENGTH), nullable=False)

    file_name: Mapped[str] = mapped_column(String(50), nullable=False)

    # Relationships
    batch: Mapped["DocumentBatch"] = relationship("DocumentBatch", back_populates="documents")
