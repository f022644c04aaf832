from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.domains.suggestions.entities import SuggestionStatus


class SuggestionCreate(BaseModel):
    """Схема для создания предложения изменений"""
    title: str = Field(..., max_length=255)
    content: str = Field(..., max_length=1000000)
    description: Optional[str] = Field(default="", max_length=10000)


class SuggestionResponse(BaseModel):
    """Схема для ответа с данными предложения"""
    id: int
    document_id: int
    title: str
    description: str
    content: str
    author_id: str
    base_version_id: int
    status: SuggestionStatus
    created_at: datetime
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[str] = None
    is_stale: bool = False

    @classmethod
    def from_entity(cls, suggestion, current_version_id: Optional[int] = None) -> "SuggestionResponse":
        return cls(
            id=suggestion.id,
            document_id=suggestion.document_id,
            title=suggestion.title,
            description=suggestion.description,
            content=suggestion.content,
            author_id=suggestion.author_id,
            base_version_id=suggestion.base_version_id,
            status=suggestion.status,
            created_at=suggestion.created_at,
            resolved_at=suggestion.resolved_at,
            resolved_by=suggestion.resolved_by,
            is_stale=suggestion.is_stale(current_version_id)
        )


class SuggestionListResponse(BaseModel):
    """Схема для списка предложений документа"""
    suggestions: List[SuggestionResponse]
    total: int
