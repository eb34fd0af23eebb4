"""Service for document drafts (whole-grid key-value store)."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import ValidationError
from src.modules.drafts.models import DocumentDraft
from src.modules.drafts.schemas import DraftRow


async def load_drafts(db: AsyncSession) -> list[DocumentDraft]:
    """All draft rows in grid order."""
    result = await db.execute(select(DocumentDraft).order_by(DocumentDraft.position))
    return list(result.scalars().all())


async def replace_drafts(db: AsyncSession, rows: list[DraftRow]) -> list[DocumentDraft]:
    """Clear the store, then write the given rows in order."""
    seen: set[str] = set()
    for row in rows:
        if row.id in seen:
            raise ValidationError(f"Duplicate draft row id '{row.id}'", field="rows")
        seen.add(row.id)

    await db.execute(delete(DocumentDraft))
    drafts = [
        DocumentDraft(position=position, **row.model_dump())
        for position, row in enumerate(rows)
    ]
    db.add_all(drafts)
    await db.flush()
    return drafts


async def clear_drafts(db: AsyncSession) -> None:
    """Remove every draft row (after a successful submit)."""
    await db.execute(delete(DocumentDraft))
    await db.flush()
