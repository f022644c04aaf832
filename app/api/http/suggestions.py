from fastapi import APIRouter, Depends, Response, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.auth import get_caller_id
from app.core.db import get_db
from app.domains.documents.schemas import DocumentVersionResponse
from app.domains.suggestions.entities import SuggestionStatus
from app.domains.suggestions.schemas import (
    SuggestionCreate, SuggestionResponse, SuggestionListResponse
)
from app.domains.suggestions.services import SuggestionService

router = APIRouter(tags=["suggestions"])


@router.post(
    "/documents/{document_id}/suggestions",
    response_model=SuggestionResponse,
    status_code=status.HTTP_201_CREATED
)
async def submit_suggestion(
    document_id: int,
    suggestion_data: SuggestionCreate,
    response: Response,
    caller_id: Optional[str] = Depends(get_caller_id),
    db: AsyncSession = Depends(get_db)
):
    """Предложение изменений к текущей версии документа"""
    suggestion_service = SuggestionService(db)

    suggestion = await suggestion_service.submit(
        document_id,
        caller_id,
        title=suggestion_data.title,
        content=suggestion_data.content,
        description=suggestion_data.description
    )

    response.headers["Location"] = f"/suggestions/{suggestion.id}"
    return SuggestionResponse.from_entity(suggestion, suggestion.base_version_id)


@router.get("/documents/{document_id}/suggestions", response_model=SuggestionListResponse)
async def list_suggestions(
    document_id: int,
    status_filter: Optional[SuggestionStatus] = Query(None, alias="status"),
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db)
):
    """Получение предложений документа в порядке создания"""
    suggestion_service = SuggestionService(db)

    suggestions = await suggestion_service.list(
        document_id, status=status_filter, limit=limit, offset=offset
    )
    total = await suggestion_service.count(document_id, status=status_filter)
    current_version_id = await suggestion_service.get_current_version_id(document_id)

    return SuggestionListResponse(
        suggestions=[SuggestionResponse.from_entity(s, current_version_id) for s in suggestions],
        total=total
    )


@router.get("/suggestions/{suggestion_id}", response_model=SuggestionResponse)
async def get_suggestion(
    suggestion_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Получение предложения по id"""
    suggestion_service = SuggestionService(db)

    suggestion = await suggestion_service.get(suggestion_id)
    current_version_id = await suggestion_service.get_current_version_id(suggestion.document_id)

    return SuggestionResponse.from_entity(suggestion, current_version_id)


@router.post("/suggestions/{suggestion_id}/accept", response_model=DocumentVersionResponse)
async def accept_suggestion(
    suggestion_id: int,
    caller_id: Optional[str] = Depends(get_caller_id),
    db: AsyncSession = Depends(get_db)
):
    """Принятие предложения владельцем документа"""
    suggestion_service = SuggestionService(db)
    version = await suggestion_service.accept(suggestion_id, caller_id)
    return DocumentVersionResponse.from_entity(version)


@router.post("/suggestions/{suggestion_id}/reject", response_model=SuggestionResponse)
async def reject_suggestion(
    suggestion_id: int,
    caller_id: Optional[str] = Depends(get_caller_id),
    db: AsyncSession = Depends(get_db)
):
    """Отклонение предложения владельцем документа"""
    suggestion_service = SuggestionService(db)
    suggestion = await suggestion_service.reject(suggestion_id, caller_id)
    return SuggestionResponse.from_entity(suggestion)
