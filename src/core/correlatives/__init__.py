from src.core.correlatives.models import CorrelativeCounter
from src.core.correlatives.allocator import (
    CorrelativeAllocator,
    CorrelativeRaceError,
    allocate_correlative,
    build_batch_filename,
    business_today,
)

__all__ = [
    "CorrelativeCounter",
    "CorrelativeAllocator",
    "CorrelativeRaceError",
    "allocate_correlative",
    "build_batch_filename",
    "business_today",
]
