import enum
from datetime import datetime
from typing import Optional

from app.core.errors import AlreadyResolvedError


class SuggestionStatus(enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ChangeSuggestion:
    """Предложение изменений: новая версия документа, ожидающая решения владельца"""

    def __init__(
        self,
        id: Optional[int],
        document_id: int,
        title: str,
        content: str,
        author_id: str,
        base_version_id: int,
        description: str = "",
        status: SuggestionStatus = SuggestionStatus.PENDING,
        created_at: Optional[datetime] = None,
        resolved_at: Optional[datetime] = None,
        resolved_by: Optional[str] = None
    ):
        self.id = id
        self.document_id = document_id
        self.title = title
        self.description = description
        self.content = content
        self.author_id = author_id
        self.base_version_id = base_version_id
        self.status = status
        self.created_at = created_at or datetime.utcnow()
        self.resolved_at = resolved_at
        self.resolved_by = resolved_by

    @property
    def is_pending(self) -> bool:
        return self.status == SuggestionStatus.PENDING

    def accept(self, reviewer_id: str) -> None:
        """Перевод предложения в статус accepted"""
        self._resolve(SuggestionStatus.ACCEPTED, reviewer_id)

    def reject(self, reviewer_id: str) -> None:
        """Перевод предложения в статус rejected"""
        self._resolve(SuggestionStatus.REJECTED, reviewer_id)

    def _resolve(self, status: SuggestionStatus, reviewer_id: str) -> None:
        if not self.is_pending:
            raise AlreadyResolvedError(f"Suggestion {self.id} is already {self.status.value}")
        self.status = status
        self.resolved_by = reviewer_id
        self.resolved_at = datetime.utcnow()

    def is_stale(self, current_version_id: Optional[int]) -> bool:
        """Базовая версия предложения больше не является текущей версией документа"""
        return self.is_pending and self.base_version_id != current_version_id

    @classmethod
    def create_suggestion(
        cls,
        document_id: int,
        title: str,
        content: str,
        author_id: str,
        base_version_id: int,
        description: Optional[str] = None
    ) -> "ChangeSuggestion":
        """Создание нового предложения в статусе pending"""
        return cls(
            id=None,
            document_id=document_id,
            title=title,
            content=content,
            author_id=author_id,
            base_version_id=base_version_id,
            description=description or ""
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChangeSuggestion):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"ChangeSuggestion(id={self.id}, document_id={self.document_id}, status={self.status.value})"
