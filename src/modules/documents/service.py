"""Service for Documents module: the submit transaction and history queries."""

import asyncio
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.config import settings
from src.core.correlatives import (
    CorrelativeAllocator,
    CorrelativeRaceError,
    build_batch_filename,
    business_today,
)
from src.core.exceptions import (
    NotFoundError,
    StoreUnavailableError,
    SubmissionConflictError,
    ValidationError,
)
from src.modules.documents.models import AccountingDocument, DocumentBatch
from src.modules.documents.schemas import (
    BatchSubmit,
    DocumentInput,
    HistoryFilters,
    SubmitResult,
)
from src.shared.utils.money import AMOUNT_LIMIT, amount_fits, parse_amount, round_amount

# serialization_failure, deadlock_detected
RETRYABLE_SQLSTATES = frozenset({"40001", "40P01"})


def is_retryable_error(exc: BaseException) -> bool:
    """True for failures caused only by a concurrent submit; a fresh attempt may succeed."""
    if isinstance(exc, CorrelativeRaceError):
        return True
    if isinstance(exc, DBAPIError):
        code = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
        if code in RETRYABLE_SQLSTATES:
            return True
        # SQLite only (local runs and the concurrency tests); PostgreSQL reports 40001/40P01
        if isinstance(exc, OperationalError) and "database is locked" in str(exc.orig).lower():
            return True
    return False


def is_unavailable_error(exc: BaseException) -> bool:
    """True when the store could not be reached or no pooled connection was free."""
    if isinstance(exc, PoolTimeoutError):
        return True
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    return isinstance(exc, OSError)


def batch_total(documents: Sequence[DocumentInput]) -> Decimal:
    """Sum of document amounts, missing or unparseable ones counting as 0."""
    return round_amount(sum((parse_amount(doc.amount) for doc in documents), Decimal("0")))


class BatchPersister:
    """Writes one batch (summary row + document rows) inside the caller's transaction."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def persist(
        self,
        business_date: date,
        correlative: int,
        file_name: str,
        documents: Sequence[DocumentInput],
    ) -> DocumentBatch:
        amounts = [parse_amount(doc.amount) for doc in documents]
        batch = DocumentBatch(
            business_date=business_date,
            correlative=correlative,
            file_name=file_name,
            document_count=len(documents),
            total_amount=batch_total(documents),
        )
        batch.documents = [
            AccountingDocument(
                correlative=correlative,
                client_ruc=doc.client_ruc,
                provider_ruc=doc.provider_ruc,
                document_type=doc.document_type,
                document_number=doc.document_number,
                internal_code=doc.internal_code,
                issue_date=doc.issue_date,
                due_date=doc.due_date,
                confirmation_date=doc.confirmation_date,
                amount=amount,
                currency=doc.currency,
                file_name=file_name,
            )
            for doc, amount in zip(documents, amounts)
        ]
        self.db.add(batch)
        await self.db.flush()
        return batch


class DocumentService:
    """Service for submitting document batches and reading their history."""

    def __init__(
        self,
        db: AsyncSession,
        max_attempts: int | None = None,
        retry_backoff_ms: int | None = None,
    ):
        self.db = db
        self.max_attempts = max_attempts or settings.submit_max_attempts
        self.retry_backoff_ms = (
            settings.submit_retry_backoff_ms if retry_backoff_ms is None else retry_backoff_ms
        )

    # --- Submit ---

    async def submit_batch(
        self, data: BatchSubmit, business_date: date | None = None
    ) -> SubmitResult:
        """
        Allocate today's next correlative and store the batch under it, atomically.

        Counter update, document rows and the summary row commit together or not
        at all. Contention with concurrent submitters is retried from scratch
        (a new allocation every attempt); exhausting the attempts raises
        SubmissionConflictError. Not idempotent: a retried request after a lost
        response creates a second batch.
        """
        if not data.documents:
            raise ValidationError("No documents were provided", field="documents")
        if not amount_fits(batch_total(data.documents)):
            raise ValidationError(
                f"Batch total must be below {AMOUNT_LIMIT:,.0f}", field="documents"
            )

        documents = data.documents
        for attempt in range(1, self.max_attempts + 1):
            # Server date only, re-read per attempt in case the day rolled over.
            day = business_date or business_today()
            try:
                batch = await self._submit_once(day, documents)
            except Exception as exc:
                await self.db.rollback()
                if is_unavailable_error(exc):
                    logger.error("Database unavailable while submitting batch: {}", exc)
                    raise StoreUnavailableError() from exc
                if not is_retryable_error(exc):
                    raise
                if attempt == self.max_attempts:
                    logger.warning(
                        "Giving up on batch for {} after {} attempts: {}",
                        day, attempt, exc,
                    )
                    raise SubmissionConflictError(attempt) from exc
                logger.info(
                    "Correlative contention for {} (attempt {}/{}), retrying",
                    day, attempt, self.max_attempts,
                )
                await asyncio.sleep(self.retry_backoff_ms * attempt / 1000)
                continue

            logger.info(
                "Stored batch {} with {} documents, total {}",
                batch.file_name, batch.document_count, batch.total_amount,
            )
            return SubmitResult(
                batch_id=batch.id,
                business_date=batch.business_date,
                correlative=batch.correlative,
                file_name=batch.file_name,
                document_count=batch.document_count,
                total_amount=batch.total_amount,
            )

    async def _submit_once(
        self, business_date: date, documents: Sequence[DocumentInput]
    ) -> DocumentBatch:
        """One attempt: lock counter, allocate, write documents and summary, commit."""
        await self.db.connection(execution_options={"isolation_level": "SERIALIZABLE"})

        allocator = CorrelativeAllocator(self.db)
        correlative = await allocator.allocate(business_date)
        file_name = build_batch_filename(business_date, correlative)

        persister = BatchPersister(self.db)
        batch = await persister.persist(business_date, correlative, file_name, documents)

        await self.db.commit()
        return batch

    # --- History ---

    async def list_documents(
        self, filters: HistoryFilters
    ) -> tuple[list[AccountingDocument], int]:
        """Documents newest first (created_at, then id), with optional creation-date range."""
        _check_range(filters)
        query = select(AccountingDocument)

        if filters.date_from:
            query = query.where(AccountingDocument.created_at >= _day_start(filters.date_from))
        if filters.date_to:
            query = query.where(
                AccountingDocument.created_at < _day_start(filters.date_to + timedelta(days=1))
            )

        # Count total
        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.db.execute(count_query)).scalar() or 0

        # Paginate
        query = query.order_by(AccountingDocument.created_at.desc(), AccountingDocument.id.desc())
        query = query.offset(filters.offset).limit(filters.limit)

        result = await self.db.execute(query)
        documents = list(result.scalars().all())

        return documents, total

    async def list_batches(self, filters: HistoryFilters) -> tuple[list[DocumentBatch], int]:
        """Batch summaries newest first, with optional business-date range."""
        _check_range(filters)
        query = select(DocumentBatch)

        if filters.date_from:
            query = query.where(DocumentBatch.business_date >= filters.date_from)
        if filters.date_to:
            query = query.where(DocumentBatch.business_date <= filters.date_to)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.db.execute(count_query)).scalar() or 0

        query = query.order_by(DocumentBatch.created_at.desc(), DocumentBatch.id.desc())
        query = query.offset(filters.offset).limit(filters.limit)

        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def get_batch(self, batch_id: int) -> DocumentBatch:
        """Get batch by ID with its documents loaded."""
        result = await self.db.execute(
            select(DocumentBatch)
            .where(DocumentBatch.id == batch_id)
            .options(selectinload(DocumentBatch.documents))
        )
        batch = result.scalar_one_or_none()
        if not batch:
            raise NotFoundError("Batch", batch_id)
        return batch


def _check_range(filters: HistoryFilters) -> None:
    if filters.date_from and filters.date_to and filters.date_from > filters.date_to:
        raise ValidationError("date_from must be on or before date_to", field="date_from")


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=ZoneInfo(settings.business_timezone))
