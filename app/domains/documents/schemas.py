from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, List
from datetime import datetime


class DocumentCreate(BaseModel):
    """Схема для создания документа"""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(default="", max_length=1000000)  # 1MB max content

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()


class DocumentVersionResponse(BaseModel):
    """Схема для ответа с данными версии документа"""
    id: int
    document_id: int
    version_number: int
    content: str
    created_by: str
    suggestion_id: Optional[int] = None
    created_at: datetime
    word_count: int
    content_length: int

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_entity(cls, version) -> "DocumentVersionResponse":
        return cls(
            id=version.id,
            document_id=version.document_id,
            version_number=version.version_number,
            content=version.content,
            created_by=version.created_by,
            suggestion_id=version.suggestion_id,
            created_at=version.created_at,
            word_count=version.get_word_count(),
            content_length=version.get_content_length()
        )


class DocumentVersionListResponse(BaseModel):
    """Схема для истории версий"""
    versions: List[DocumentVersionResponse]
    total: int


class DocumentResponse(BaseModel):
    """Схема для ответа с данными документа и содержимым текущей версии"""
    id: int
    title: str
    owner_id: str
    current_version_id: Optional[int] = None
    current_version_number: Optional[int] = None
    content: str
    created_at: datetime
    updated_at: datetime
    word_count: int
    content_length: int

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_entity(cls, document) -> "DocumentResponse":
        current = document.current_version
        return cls(
            id=document.id,
            title=document.title,
            owner_id=document.owner_id,
            current_version_id=document.current_version_id,
            current_version_number=current.version_number if current else None,
            content=document.content,
            created_at=document.created_at,
            updated_at=document.updated_at,
            word_count=document.get_word_count(),
            content_length=document.get_content_length()
        )


class DocumentSummary(BaseModel):
    """Краткая схема документа для списков"""
    id: int
    title: str
    owner_id: str
    current_version_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DocumentListResponse(BaseModel):
    """Схема для списка документов"""
    documents: List[DocumentSummary]
    total: int
    page: int
    per_page: int
