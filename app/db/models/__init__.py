from app.db.models.document import Document, DocumentVersion, ChangeSuggestion

__all__ = [
    "Document",
    "DocumentVersion",
    "ChangeSuggestion"
]
