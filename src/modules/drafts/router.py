"""API for document drafts."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database.session import get_db
from src.modules.drafts.schemas import DraftRow, DraftsReplace
from src.modules.drafts.service import clear_drafts, load_drafts, replace_drafts
from src.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/drafts", tags=["Drafts"])


@router.get("", response_model=ApiResponse[list[DraftRow]])
async def get_drafts(db: AsyncSession = Depends(get_db)):
    """Load the saved grid."""
    rows = await load_drafts(db)
    return ApiResponse(data=[DraftRow.model_validate(r) for r in rows])


@router.put("", response_model=ApiResponse[list[DraftRow]])
async def put_drafts(
    data: DraftsReplace,
    db: AsyncSession = Depends(get_db),
):
    """Replace the saved grid with the given rows."""
    rows = await replace_drafts(db, data.rows)
    await db.commit()
    return ApiResponse(
        data=[DraftRow.model_validate(r) for r in rows],
        message="Drafts saved",
    )


@router.delete("", response_model=ApiResponse[None])
async def delete_drafts(db: AsyncSession = Depends(get_db)):
    """Clear the saved grid."""
    await clear_drafts(db)
    await db.commit()
    return ApiResponse(data=None, message="Drafts cleared")
