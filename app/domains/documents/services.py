import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import (
    ConflictError, ForbiddenError, NotFoundError, UnauthorizedError, ValidationError
)
from app.db.repositories.document_repository import DocumentRepository, DocumentVersionRepository
from app.domains.documents.entities import Document, DocumentVersion, DocumentAccess

logger = logging.getLogger(__name__)


class DocumentService:
    """Сервис жизненного цикла документов: создание, чтение, удаление"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.document_repository = DocumentRepository(session)
        self.version_service = DocumentVersionService(session)

    async def create_document(self, owner_id: Optional[str], title: str, initial_content: str = "") -> Document:
        """Создание документа вместе с начальной версией в одной транзакции"""
        if not owner_id:
            raise UnauthorizedError("Authentication required to create a document")

        title = (title or "").strip()
        if not title:
            raise ValidationError("Title cannot be empty")

        try:
            document = await self.document_repository.create(
                Document.create_document(title=title, owner_id=owner_id)
            )
            initial_version = await self.version_service.create_initial_version(
                document.id, initial_content or "", created_by=owner_id
            )
            await self.document_repository.set_current_version(document.id, initial_version.id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        document.current_version_id = initial_version.id
        document.current_version = initial_version
        logger.info("Document %s created by %s", document.id, owner_id)
        return document

    async def get_document(self, document_id: int) -> Document:
        """Получение документа с содержимым текущей версии"""
        document = await self.document_repository.get_with_current_version(document_id)

        if not document:
            raise NotFoundError(f"Document {document_id} not found")

        return document

    async def list_documents(
        self,
        owner_id: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> tuple[List[Document], int]:
        """Получение списка документов и общего количества"""
        documents = await self.document_repository.list(owner_id, limit=limit, offset=offset)
        total = await self.document_repository.count(owner_id)
        return documents, total

    async def delete_document(self, document_id: int, caller_id: Optional[str]) -> None:
        """Удаление документа вместе с историей. Только владелец может удалить документ"""
        document = await self.document_repository.get_by_id(document_id)

        if not document:
            raise NotFoundError(f"Document {document_id} not found")

        access = DocumentAccess.for_document(document)
        if not access.can_delete(caller_id):
            raise ForbiddenError("Only the owner can delete this document")

        try:
            await self.document_repository.get_for_update(document_id)
            await self.document_repository.delete_cascade(document_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Document %s deleted by %s", document_id, caller_id)


class DocumentVersionService:
    """Хранилище версий: текущая версия документа и история"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.version_repository = DocumentVersionRepository(session)
        self.document_repository = DocumentRepository(session)

    async def get_current(self, document_id: int) -> DocumentVersion:
        """Получение текущей версии документа"""
        document = await self.document_repository.get_with_current_version(document_id)

        if not document or not document.current_version:
            raise NotFoundError(f"Current version of document {document_id} not found")

        return document.current_version

    async def create_initial_version(self, document_id: int, content: str, created_by: str) -> DocumentVersion:
        """Создание первой версии. Используется только при создании документа"""
        version = DocumentVersion.create_version(
            document_id=document_id,
            content=content,
            version_number=1,
            created_by=created_by
        )
        return await self.version_repository.create(version)

    async def promote(
        self,
        document_id: int,
        new_content: str,
        created_by: str,
        expected_current_id: Optional[int] = None,
        suggestion_id: Optional[int] = None
    ) -> DocumentVersion:
        """Создание новой версии и перенос на нее указателя текущей версии.

        Предыдущая версия не меняется. Если передан expected_current_id и
        текущая версия документа уже другая, поднимается ConflictError.
        Транзакцию фиксирует вызывающий код.
        """
        document = await self.document_repository.get_for_update(document_id)

        if not document:
            raise NotFoundError(f"Document {document_id} not found")

        if expected_current_id is not None and document.current_version_id != expected_current_id:
            raise ConflictError(
                f"Document {document_id} moved from version {expected_current_id} "
                f"to {document.current_version_id}"
            )

        version_number = await self.version_repository.next_version_number(document_id)
        version = await self.version_repository.create(
            DocumentVersion.create_version(
                document_id=document_id,
                content=new_content,
                version_number=version_number,
                created_by=created_by,
                suggestion_id=suggestion_id
            )
        )
        await self.document_repository.set_current_version(document_id, version.id)

        logger.info(
            "Document %s promoted to version %s (#%s)", document_id, version.id, version.version_number
        )
        return version

    async def list_versions(
        self,
        document_id: int,
        limit: int = 50,
        offset: int = 0
    ) -> tuple[List[DocumentVersion], int]:
        """Получение истории версий документа"""
        document = await self.document_repository.get_by_id(document_id)

        if not document:
            raise NotFoundError(f"Document {document_id} not found")

        versions = await self.version_repository.get_by_document(document_id, limit, offset)
        total = await self.version_repository.count_by_document(document_id)
        return versions, total

    async def get_version(self, document_id: int, version_id: int) -> DocumentVersion:
        """Получение конкретной версии документа"""
        version = await self.version_repository.get_by_id(version_id)

        if not version or version.document_id != document_id:
            raise NotFoundError(f"Version {version_id} of document {document_id} not found")

        return version
