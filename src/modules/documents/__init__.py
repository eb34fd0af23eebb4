from src.modules.documents.models import AccountingDocument, DocumentBatch
from src.modules.documents.service import BatchPersister, DocumentService
from src.modules.documents.router import router

__all__ = [
    "AccountingDocument",
    "DocumentBatch",
    "BatchPersister",
    "DocumentService",
    "router",
]
