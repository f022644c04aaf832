from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func

from app.db.models.document import (
    Document as DocumentModel,
    DocumentVersion as DocumentVersionModel,
    ChangeSuggestion as ChangeSuggestionModel
)

if TYPE_CHECKING:
    from app.domains.documents.entities import Document, DocumentVersion


class DocumentRepository:
    """Репозиторий для работы с документами.

    Методы только добавляют изменения в сессию (flush), фиксацию
    транзакции выполняет сервис.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: "Document") -> "Document":
        """Создание нового документа"""
        db_document = DocumentModel(
            title=document.title,
            owner_id=document.owner_id,
            current_version_id=document.current_version_id,
            created_at=document.created_at,
            updated_at=document.updated_at
        )

        self.session.add(db_document)
        await self.session.flush()
        return self._to_domain(db_document)

    async def get_by_id(self, document_id: int) -> Optional["Document"]:
        """Получение документа по id"""
        result = await self.session.execute(
            select(DocumentModel).where(DocumentModel.id == document_id)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def get_with_current_version(self, document_id: int) -> Optional["Document"]:
        """Получение документа вместе с текущей версией одним запросом"""
        result = await self.session.execute(
            select(DocumentModel, DocumentVersionModel)
            .outerjoin(DocumentVersionModel, DocumentVersionModel.id == DocumentModel.current_version_id)
            .where(DocumentModel.id == document_id)
        )
        row = result.first()
        if row is None:
            return None

        db_document, db_version = row
        document = self._to_domain(db_document)
        if db_version is not None:
            document.current_version = DocumentVersionRepository._to_domain(db_version)
        return document

    async def get_for_update(self, document_id: int) -> Optional["Document"]:
        """Получение документа с блокировкой строки до конца транзакции"""
        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.id == document_id)
            .with_for_update()
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def list(
        self,
        owner_id: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List["Document"]:
        """Получение документов, новые первыми"""
        query = select(DocumentModel)
        if owner_id:
            query = query.where(DocumentModel.owner_id == owner_id)

        result = await self.session.execute(
            query
            .order_by(DocumentModel.created_at.desc(), DocumentModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        db_documents = result.scalars().all()
        return [self._to_domain(doc) for doc in db_documents]

    async def count(self, owner_id: Optional[str] = None) -> int:
        """Подсчет количества документов"""
        query = select(func.count(DocumentModel.id))
        if owner_id:
            query = query.where(DocumentModel.owner_id == owner_id)
        result = await self.session.execute(query)
        return result.scalar()

    async def set_current_version(self, document_id: int, version_id: int) -> None:
        """Перенос указателя текущей версии"""
        await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document_id)
            .values(current_version_id=version_id, updated_at=datetime.utcnow())
        )

    async def delete_cascade(self, document_id: int) -> bool:
        """Удаление документа вместе с версиями и предложениями"""
        await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document_id)
            .values(current_version_id=None)
        )
        await self.session.execute(
            delete(ChangeSuggestionModel).where(ChangeSuggestionModel.document_id == document_id)
        )
        await self.session.execute(
            delete(DocumentVersionModel).where(DocumentVersionModel.document_id == document_id)
        )
        result = await self.session.execute(
            delete(DocumentModel).where(DocumentModel.id == document_id)
        )
        return result.rowcount > 0

    def _to_domain(self, db_document: DocumentModel) -> "Document":
        """Преобразование модели БД в доменную сущность"""
        from app.domains.documents.entities import Document

        return Document(
            id=db_document.id,
            title=db_document.title,
            owner_id=db_document.owner_id,
            current_version_id=db_document.current_version_id,
            created_at=db_document.created_at,
            updated_at=db_document.updated_at
        )


class DocumentVersionRepository:
    """Репозиторий для работы с версиями документов"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, version: "DocumentVersion") -> "DocumentVersion":
        """Создание новой версии документа"""
        db_version = DocumentVersionModel(
            document_id=version.document_id,
            content=version.content,
            version_number=version.version_number,
            created_by=version.created_by,
            suggestion_id=version.suggestion_id,
            created_at=version.created_at
        )

        self.session.add(db_version)
        await self.session.flush()
        return self._to_domain(db_version)

    async def get_by_id(self, version_id: int) -> Optional["DocumentVersion"]:
        """Получение версии по id"""
        result = await self.session.execute(
            select(DocumentVersionModel).where(DocumentVersionModel.id == version_id)
        )
        db_version = result.scalar_one_or_none()
        return self._to_domain(db_version) if db_version else None

    async def get_by_document(
        self,
        document_id: int,
        limit: int = 50,
        offset: int = 0
    ) -> List["DocumentVersion"]:
        """Получение истории версий документа, старые первыми"""
        result = await self.session.execute(
            select(DocumentVersionModel)
            .where(DocumentVersionModel.document_id == document_id)
            .order_by(DocumentVersionModel.version_number.asc())
            .offset(offset)
            .limit(limit)
        )
        db_versions = result.scalars().all()
        return [self._to_domain(version) for version in db_versions]

    async def next_version_number(self, document_id: int) -> int:
        """Номер для следующей версии документа"""
        result = await self.session.execute(
            select(func.max(DocumentVersionModel.version_number))
            .where(DocumentVersionModel.document_id == document_id)
        )
        return (result.scalar() or 0) + 1

    async def count_by_document(self, document_id: int) -> int:
        """Подсчет количества версий документа"""
        result = await self.session.execute(
            select(func.count(DocumentVersionModel.id))
            .where(DocumentVersionModel.document_id == document_id)
        )
        return result.scalar()

    @staticmethod
    def _to_domain(db_version: DocumentVersionModel) -> "DocumentVersion":
        """Преобразование модели БД в доменную сущность"""
        from app.domains.documents.entities import DocumentVersion

        return DocumentVersion(
            id=db_version.id,
            document_id=db_version.document_id,
            content=db_version.content,
            version_number=db_version.version_number,
            created_by=db_version.created_by,
            suggestion_id=db_version.suggestion_id,
            created_at=db_version.created_at
        )
