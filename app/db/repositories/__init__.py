from app.db.repositories.document_repository import DocumentRepository, DocumentVersionRepository
from app.db.repositories.suggestion_repository import ChangeSuggestionRepository

__all__ = [
    "DocumentRepository",
    "DocumentVersionRepository",
    "ChangeSuggestionRepository"
]
