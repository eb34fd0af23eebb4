"""API endpoints for Documents module."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database.session import get_db
from src.modules.documents.export import encode_client_summary, encode_fixed_width
from src.modules.documents.schemas import (
    BatchDetailResponse,
    BatchResponse,
    BatchSubmit,
    DocumentResponse,
    HistoryFilters,
    SubmitResult,
)
from src.modules.documents.service import DocumentService
from src.shared.schemas.base import ApiResponse, PaginatedResponse

router = APIRouter(prefix="/documents", tags=["Documents"])


# --- Batch Endpoints ---


@router.post(
    "/batches",
    response_model=ApiResponse[SubmitResult],
    status_code=status.HTTP_201_CREATED,
)
async def submit_batch(
    data: BatchSubmit,
    db: AsyncSession = Depends(get_db),
):
    """
    Store a batch of documents under today's next correlative.

    Not idempotent: resubmitting after a lost response creates another batch.
    """
    service = DocumentService(db)
    result = await service.submit_batch(data)
    return ApiResponse(
        data=result,
        message=f"Saved {result.document_count} documents with correlative {result.correlative}",
    )


@router.get(
    "/batches",
    response_model=ApiResponse[PaginatedResponse[BatchResponse]],
)
async def list_batches(
    date_from: date | None = Query(None, description="Business date from (inclusive)"),
    date_to: date | None = Query(None, description="Business date to (inclusive)"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """List batch summaries, newest first."""
    service = DocumentService(db)
    filters = HistoryFilters(date_from=date_from, date_to=date_to, limit=limit, offset=offset)
    batches, total = await service.list_batches(filters)
    return ApiResponse(
        data=PaginatedResponse(
            items=[BatchResponse.model_validate(b) for b in batches],
            total=total,
            limit=limit,
            offset=offset,
        ),
    )


@router.get(
    "/batches/{batch_id}",
    response_model=ApiResponse[BatchDetailResponse],
)
async def get_batch(
    batch_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a batch with its documents."""
    service = DocumentService(db)
    batch = await service.get_batch(batch_id)
    return ApiResponse(data=BatchDetailResponse.model_validate(batch))


def _text_attachment(content: str, file_name: str) -> Response:
    return Response(
        content=content,
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )


@router.get("/batches/{batch_id}/export/client-summary")
async def export_client_summary(
    batch_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Download the batch as RUC|TOTAL lines (canonical CONCAR file)."""
    service = DocumentService(db)
    batch = await service.get_batch(batch_id)
    return _text_attachment(encode_client_summary(batch.documents), batch.file_name)


@router.get("/batches/{batch_id}/export/fixed-width")
async def export_fixed_width(
    batch_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Download the batch as positional lines, one per document."""
    service = DocumentService(db)
    batch = await service.get_batch(batch_id)
    return _text_attachment(encode_fixed_width(batch.documents), batch.file_name)


# --- History Endpoints ---


@router.get(
    "",
    response_model=ApiResponse[PaginatedResponse[DocumentResponse]],
)
async def list_documents(
    date_from: date | None = Query(None, description="Created from (inclusive)"),
    date_to: date | None = Query(None, description="Created to (inclusive)"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """Document history, newest first."""
    service = DocumentService(db)
    filters = HistoryFilters(date_from=date_from, date_to=date_to, limit=limit, offset=offset)
    documents, total = await service.list_documents(filters)
    return ApiResponse(
        data=PaginatedResponse(
            items=[DocumentResponse.model_validate(d) for d in documents],
            total=total,
            limit=limit,
            offset=offset,
        ),
    )
