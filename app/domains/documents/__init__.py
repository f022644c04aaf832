from app.domains.documents.entities import Document, DocumentVersion, DocumentAccess
from app.domains.documents.schemas import (
    DocumentCreate, DocumentResponse, DocumentSummary, DocumentListResponse,
    DocumentVersionResponse, DocumentVersionListResponse
)
from app.domains.documents.services import DocumentService, DocumentVersionService

__all__ = [
    "Document", "DocumentVersion", "DocumentAccess",
    "DocumentCreate", "DocumentResponse", "DocumentSummary", "DocumentListResponse",
    "DocumentVersionResponse", "DocumentVersionListResponse",
    "DocumentService", "DocumentVersionService"
]
