from datetime import date, datetime
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.correlatives.models import CorrelativeCounter


class CorrelativeRaceError(Exception):
    """Another transaction created the counter row for the same date first."""

    def __init__(self, business_date: date):
        self.business_date = business_date
        super().__init__(f"Counter row for {business_date.isoformat()} was created concurrently")


def business_today() -> date:
    """Server-side "today" in the configured business timezone."""
    return datetime.now(ZoneInfo(settings.business_timezone)).date()


def build_batch_filename(business_date: date, correlative: int, prefix: str | None = None) -> str:
    """
    Build the export file name for a batch: PREFIX + YYYYMMDD + NNN + .txt

    Examples:
        RCP20250115007.txt
        RCP20250115123.txt
    """
    if correlative < 1:
        raise ValueError(f"Correlative must be positive, got {correlative}")
    if prefix is None:
        prefix = settings.batch_file_prefix
    return f"{prefix}{business_date:%Y%m%d}{correlative:03d}.txt"


class CorrelativeAllocator:
    """
    Hands out per-day sequential correlatives: 1, 2, 3, ... for each business date.

    Must be called inside the caller's transaction; the counter update only
    becomes visible when that transaction commits, and disappears with it on
    rollback.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def allocate(self, business_date: date) -> int:
        """
        Allocate the next correlative for business_date.

        Uses SELECT FOR UPDATE so concurrent allocators for the same date queue
        on the counter row. The increment is done in SQL, not from the value read.
        """
        stmt = (
            select(CorrelativeCounter)
            .where(CorrelativeCounter.business_date == business_date)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        counter = result.scalar_one_or_none()

        if counter is None:
            # First batch of the day
            counter = CorrelativeCounter(business_date=business_date, last_correlative=1)
            self.session.add(counter)
            try:
                await self.session.flush()
            except IntegrityError as exc:
                raise CorrelativeRaceError(business_date) from exc
            return 1

        counter.last_correlative = CorrelativeCounter.last_correlative + 1
        await self.session.flush()
        await self.session.refresh(counter, attribute_names=["last_correlative"])
        return counter.last_correlative


async def allocate_correlative(session: AsyncSession, business_date: date | None = None) -> int:
    """Convenience function to allocate a correlative for today (server date) or a given date."""
    allocator = CorrelativeAllocator(session)
    return await allocator.allocate(business_date or business_today())
