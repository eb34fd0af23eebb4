"""Document drafts: the clerk's editing grid, kept so it survives page reloads."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database.base import Base


class DocumentDraft(Base):
    """One grid row keyed by the client-generated row token. Everything is free text."""

    __tablename__ = "document_drafts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    client_ruc: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    provider_ruc: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    document_type: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    document_number: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    internal_code: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    issue_date: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    due_date: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    confirmation_date: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    amount: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    currency: Mapped[str] = mapped_column(String(20), nullable=False, default="")
