from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func

from app.db.models.document import ChangeSuggestion as ChangeSuggestionModel
from app.domains.suggestions.entities import SuggestionStatus

if TYPE_CHECKING:
    from app.domains.suggestions.entities import ChangeSuggestion


class ChangeSuggestionRepository:
    """Репозиторий для работы с предложениями изменений"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, suggestion: "ChangeSuggestion") -> "ChangeSuggestion":
        """Создание нового предложения"""
        db_suggestion = ChangeSuggestionModel(
            document_id=suggestion.document_id,
            title=suggestion.title,
            description=suggestion.description,
            content=suggestion.content,
            author_id=suggestion.author_id,
            base_version_id=suggestion.base_version_id,
            status=suggestion.status,
            created_at=suggestion.created_at
        )

        self.session.add(db_suggestion)
        await self.session.flush()
        return self._to_domain(db_suggestion)

    async def get_by_id(self, suggestion_id: int) -> Optional["ChangeSuggestion"]:
        """Получение предложения по id"""
        result = await self.session.execute(
            select(ChangeSuggestionModel).where(ChangeSuggestionModel.id == suggestion_id)
        )
        db_suggestion = result.scalar_one_or_none()
        return self._to_domain(db_suggestion) if db_suggestion else None

    async def get_by_document(
        self,
        document_id: int,
        status: Optional[SuggestionStatus] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List["ChangeSuggestion"]:
        """Получение предложений документа в порядке создания.

        Без limit возвращаются все предложения документа.
        """
        query = select(ChangeSuggestionModel).where(ChangeSuggestionModel.document_id == document_id)
        if status is not None:
            query = query.where(ChangeSuggestionModel.status == status)

        query = query.order_by(
            ChangeSuggestionModel.created_at.asc(), ChangeSuggestionModel.id.asc()
        ).offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        db_suggestions = result.scalars().all()
        return [self._to_domain(suggestion) for suggestion in db_suggestions]

    async def count_by_document(
        self,
        document_id: int,
        status: Optional[SuggestionStatus] = None
    ) -> int:
        """Подсчет количества предложений документа"""
        query = select(func.count(ChangeSuggestionModel.id)).where(
            ChangeSuggestionModel.document_id == document_id
        )
        if status is not None:
            query = query.where(ChangeSuggestionModel.status == status)

        result = await self.session.execute(query)
        return result.scalar()

    async def update_resolution(self, suggestion: "ChangeSuggestion") -> bool:
        """Сохранение решения по предложению.

        Обновляется только строка в статусе pending, поэтому два
        одновременных решения по одному предложению не пройдут оба.
        """
        result = await self.session.execute(
            update(ChangeSuggestionModel)
            .where(
                ChangeSuggestionModel.id == suggestion.id,
                ChangeSuggestionModel.status == SuggestionStatus.PENDING
            )
            .values(
                status=suggestion.status,
                resolved_at=suggestion.resolved_at,
                resolved_by=suggestion.resolved_by
            )
        )
        return result.rowcount > 0

    def _to_domain(self, db_suggestion: ChangeSuggestionModel) -> "ChangeSuggestion":
        """Преобразование модели БД в доменную сущность"""
        from app.domains.suggestions.entities import ChangeSuggestion

        return ChangeSuggestion(
            id=db_suggestion.id,
            document_id=db_suggestion.document_id,
            title=db_suggestion.title,
            description=db_suggestion.description,
            content=db_suggestion.content,
            author_id=db_suggestion.author_id,
            base_version_id=db_suggestion.base_version_id,
            status=db_suggestion.status,
            created_at=db_suggestion.created_at,
            resolved_at=db_suggestion.resolved_at,
            resolved_by=db_suggestion.resolved_by
        )
