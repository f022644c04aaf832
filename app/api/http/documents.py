import logging
from fastapi import APIRouter, Depends, Response, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.auth import get_caller_id
from app.core.db import get_db
from app.core.errors import ForbiddenError, NotFoundError
from app.domains.documents.schemas import (
    DocumentCreate, DocumentResponse, DocumentSummary, DocumentListResponse,
    DocumentVersionResponse, DocumentVersionListResponse
)
from app.domains.documents.services import DocumentService, DocumentVersionService

router = APIRouter(prefix="/documents", tags=["documents"])

logger = logging.getLogger(__name__)


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    caller_id: Optional[str] = Depends(get_caller_id),
    db: AsyncSession = Depends(get_db)
):
    """Создание нового документа с начальной версией"""
    document_service = DocumentService(db)
    document = await document_service.create_document(caller_id, document_data.title, document_data.content)
    return DocumentResponse.from_entity(document)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    mine: bool = Query(False),
    caller_id: Optional[str] = Depends(get_caller_id),
    db: AsyncSession = Depends(get_db)
):
    """Получение списка документов"""
    document_service = DocumentService(db)

    owner_id = caller_id if mine else None
    if mine and not owner_id:
        return DocumentListResponse(documents=[], total=0, page=page, per_page=per_page)

    offset = (page - 1) * per_page
    documents, total = await document_service.list_documents(owner_id, limit=per_page, offset=offset)

    return DocumentListResponse(
        documents=[DocumentSummary.model_validate(doc) for doc in documents],
        total=total,
        page=page,
        per_page=per_page
    )


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Получение документа и содержимого текущей версии"""
    document_service = DocumentService(db)
    document = await document_service.get_document(document_id)
    return DocumentResponse.from_entity(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: int,
    caller_id: Optional[str] = Depends(get_caller_id),
    db: AsyncSession = Depends(get_db)
):
    """Удаление документа.

    Отказ не раскрывает существование документа: ответ всегда 204.
    """
    document_service = DocumentService(db)

    try:
        await document_service.delete_document(document_id, caller_id)
    except (ForbiddenError, NotFoundError) as e:
        logger.warning("Delete of document %s by %s ignored: %s", document_id, caller_id, e.message)

    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"Location": "/documents"})


@router.get("/{document_id}/versions", response_model=DocumentVersionListResponse)
async def list_document_versions(
    document_id: int,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db)
):
    """История версий документа"""
    version_service = DocumentVersionService(db)
    versions, total = await version_service.list_versions(document_id, limit=limit, offset=offset)

    return DocumentVersionListResponse(
        versions=[DocumentVersionResponse.from_entity(v) for v in versions],
        total=total
    )


@router.get("/{document_id}/versions/{version_id}", response_model=DocumentVersionResponse)
async def get_document_version(
    document_id: int,
    version_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Получение конкретной версии документа"""
    version_service = DocumentVersionService(db)
    version = await version_service.get_version(document_id, version_id)
    return DocumentVersionResponse.from_entity(version)
