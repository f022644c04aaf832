import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import (
    AlreadyResolvedError, ForbiddenError, InvalidStateError, NotFoundError,
    UnauthorizedError, ValidationError
)
from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.suggestion_repository import ChangeSuggestionRepository
from app.domains.documents.entities import Document, DocumentAccess, DocumentVersion
from app.domains.documents.services import DocumentVersionService
from app.domains.suggestions.entities import ChangeSuggestion, SuggestionStatus

logger = logging.getLogger(__name__)


class SuggestionService:
    """Сервис предложений изменений: создание, просмотр, принятие и отклонение"""

    def __init__(self, session: AsyncSession, strict_base_version: Optional[bool] = None):
        self.session = session
        self.suggestion_repository = ChangeSuggestionRepository(session)
        self.document_repository = DocumentRepository(session)
        self.version_service = DocumentVersionService(session)
        if strict_base_version is None:
            strict_base_version = settings.strict_base_version
        self.strict_base_version = strict_base_version

    async def submit(
        self,
        document_id: int,
        author_id: Optional[str],
        title: str,
        content: str,
        description: Optional[str] = None
    ) -> ChangeSuggestion:
        """Создание предложения на основе текущей версии документа.

        Базовая версия берется из документа на момент вызова, клиент
        ее не передает.
        """
        if not author_id:
            raise UnauthorizedError("Authentication required to suggest changes")

        title = (title or "").strip()
        if not title:
            raise ValidationError("Title cannot be empty")
        if not content or not content.strip():
            raise ValidationError("Content cannot be empty")

        document = await self._get_document(document_id)

        if not document.has_current_version():
            raise InvalidStateError(f"Document {document_id} has no current version")

        access = DocumentAccess.for_document(document)
        if not access.can_suggest(author_id):
            raise ForbiddenError("You don't have permission to suggest changes")

        suggestion = ChangeSuggestion.create_suggestion(
            document_id=document.id,
            title=title,
            content=content,
            author_id=author_id,
            base_version_id=document.current_version_id,
            description=description
        )

        try:
            created = await self.suggestion_repository.create(suggestion)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Suggestion %s submitted for document %s by %s (base version %s)",
            created.id, document_id, author_id, created.base_version_id
        )
        return created

    async def list(
        self,
        document_id: int,
        status: Optional[SuggestionStatus] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[ChangeSuggestion]:
        """Получение предложений документа, старые первыми"""
        await self._get_document(document_id)
        return await self.suggestion_repository.get_by_document(
            document_id, status=status, limit=limit, offset=offset
        )

    async def count(self, document_id: int, status: Optional[SuggestionStatus] = None) -> int:
        """Количество предложений документа с учетом фильтра по статусу"""
        await self._get_document(document_id)
        return await self.suggestion_repository.count_by_document(document_id, status=status)

    async def get(self, suggestion_id: int) -> ChangeSuggestion:
        """Получение предложения по id"""
        suggestion = await self.suggestion_repository.get_by_id(suggestion_id)

        if not suggestion:
            raise NotFoundError(f"Suggestion {suggestion_id} not found")

        return suggestion

    async def accept(self, suggestion_id: int, reviewer_id: Optional[str]) -> DocumentVersion:
        """Принятие предложения: его содержимое становится новой текущей версией.

        Устаревшее предложение (документ изменился после его создания)
        принимается поверх текущей версии, если не включен режим
        strict_base_version.
        """
        suggestion, document = await self._get_for_review(suggestion_id, reviewer_id)

        if not DocumentAccess.for_document(document).can_accept(reviewer_id):
            raise ForbiddenError("Only the owner can accept suggestions")

        if not suggestion.is_pending:
            raise AlreadyResolvedError(f"Suggestion {suggestion_id} is already {suggestion.status.value}")

        expected_current_id = suggestion.base_version_id if self.strict_base_version else None

        try:
            version = await self.version_service.promote(
                document.id,
                suggestion.content,
                created_by=suggestion.author_id,
                expected_current_id=expected_current_id,
                suggestion_id=suggestion.id
            )
            suggestion.accept(reviewer_id)
            if not await self.suggestion_repository.update_resolution(suggestion):
                raise AlreadyResolvedError(f"Suggestion {suggestion_id} is already resolved")
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Suggestion %s accepted by %s, document %s now at version %s",
            suggestion_id, reviewer_id, document.id, version.id
        )
        return version

    async def reject(self, suggestion_id: int, reviewer_id: Optional[str]) -> ChangeSuggestion:
        """Отклонение предложения. Документ не меняется"""
        suggestion, document = await self._get_for_review(suggestion_id, reviewer_id)

        if not DocumentAccess.for_document(document).can_reject(reviewer_id):
            raise ForbiddenError("Only the owner can reject suggestions")

        if not suggestion.is_pending:
            raise AlreadyResolvedError(f"Suggestion {suggestion_id} is already {suggestion.status.value}")

        try:
            suggestion.reject(reviewer_id)
            if not await self.suggestion_repository.update_resolution(suggestion):
                raise AlreadyResolvedError(f"Suggestion {suggestion_id} is already resolved")
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Suggestion %s rejected by %s", suggestion_id, reviewer_id)
        return suggestion

    async def get_current_version_id(self, document_id: int) -> Optional[int]:
        """Id текущей версии документа, для пометки устаревших предложений"""
        document = await self._get_document(document_id)
        return document.current_version_id

    async def _get_document(self, document_id: int) -> Document:
        document = await self.document_repository.get_by_id(document_id)

        if not document:
            raise NotFoundError(f"Document {document_id} not found")

        return document

    async def _get_for_review(
        self,
        suggestion_id: int,
        reviewer_id: Optional[str]
    ) -> tuple[ChangeSuggestion, Document]:
        suggestion = await self.get(suggestion_id)

        if not reviewer_id:
            raise UnauthorizedError("Authentication required to review suggestions")

        document = await self._get_document(suggestion.document_id)
        return suggestion, document
