"""Correlative counters, document batches, documents and drafts

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # One counter row per business date
    op.create_table(
        "correlative_counters",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("business_date", sa.Date(), nullable=False),
        sa.Column("last_correlative", sa.Integer(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("business_date", name="uq_correlative_counter_business_date"),
        sa.CheckConstraint("last_correlative >= 1", name="ck_correlative_counter_positive"),
    )

    # Transaction summaries
    op.create_table(
        "document_batches",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("business_date", sa.Date(), nullable=False),
        sa.Column("correlative", sa.Integer(), nullable=False),
        sa.Column("file_name", sa.String(50), nullable=False),
        sa.Column("document_count", sa.Integer(), nullable=False),
        sa.Column("total_amount", sa.Numeric(18, 4), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["business_date"], ["correlative_counters.business_date"]),
        sa.UniqueConstraint("file_name"),
        sa.UniqueConstraint(
            "business_date", "correlative", name="uq_document_batch_date_correlative"
        ),
    )
    op.create_index("ix_document_batches_business_date", "document_batches", ["business_date"])
    op.create_index("ix_document_batches_created_at", "document_batches", ["created_at"])

    # Documents
    op.create_table(
        "accounting_documents",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("batch_id", sa.BigInteger(), nullable=False),
        sa.Column("correlative", sa.Integer(), nullable=False),
        sa.Column("client_ruc", sa.String(11), nullable=False),
        sa.Column("provider_ruc", sa.String(11), nullable=False),
        sa.Column("document_type", sa.String(2), nullable=False),
        sa.Column("document_number", sa.String(25), nullable=False),
        sa.Column("internal_code", sa.String(50), nullable=True),
        sa.Column("issue_date", sa.Date(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("confirmation_date", sa.Date(), nullable=True),
        sa.Column("amount", sa.Numeric(18, 4), nullable=False),
        sa.Column("currency", sa.String(2), nullable=False),
        sa.Column("file_name", sa.String(50), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["batch_id"], ["document_batches.id"]),
    )
    op.create_index("ix_accounting_documents_batch_id", "accounting_documents", ["batch_id"])
    op.create_index("ix_accounting_documents_client_ruc", "accounting_documents", ["client_ruc"])
    op.create_index("ix_accounting_documents_created_at", "accounting_documents", ["created_at"])

    # Grid drafts
    op.create_table(
        "document_drafts",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("client_ruc", sa.String(50), nullable=False, server_default=""),
        sa.Column("provider_ruc", sa.String(50), nullable=False, server_default=""),
        sa.Column("document_type", sa.String(50), nullable=False, server_default=""),
        sa.Column("document_number", sa.String(100), nullable=False, server_default=""),
        sa.Column("internal_code", sa.String(100), nullable=False, server_default=""),
        sa.Column("issue_date", sa.String(20), nullable=False, server_default=""),
        sa.Column("due_date", sa.String(20), nullable=False, server_default=""),
        sa.Column("confirmation_date", sa.String(20), nullable=False, server_default=""),
        sa.Column("amount", sa.String(50), nullable=False, server_default=""),
        sa.Column("currency", sa.String(20), nullable=False, server_default=""),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_document_drafts_position", "document_drafts", ["position"])


def downgrade() -> None:
    op.drop_index("ix_document_drafts_position", table_name="document_drafts")
    op.drop_table("document_drafts")
    op.drop_index("ix_accounting_documents_created_at", table_name="accounting_documents")
    op.drop_index("ix_accounting_documents_client_ruc", table_name="accounting_documents")
    op.drop_index("ix_accounting_documents_batch_id", table_name="accounting_documents")
    op.drop_table("accounting_documents")
    op.drop_index("ix_document_batches_created_at", table_name="document_batches")
    op.drop_index("ix_document_batches_business_date", table_name="document_batches")
    op.drop_table("document_batches")
    op.drop_table("correlative_counters")
