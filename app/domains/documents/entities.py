from datetime import datetime
from typing import Optional


class Document:
    """Сущность документа домена Documents"""

    def __init__(
        self,
        id: Optional[int],
        title: str,
        owner_id: str,
        current_version_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        current_version: Optional["DocumentVersion"] = None
    ):
        self.id = id
        self.title = title
        self.owner_id = owner_id
        self.current_version_id = current_version_id
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()
        self.current_version = current_version

    @property
    def content(self) -> str:
        """Содержимое текущей версии"""
        return self.current_version.content if self.current_version else ""

    def has_current_version(self) -> bool:
        return self.current_version_id is not None

    def get_content_length(self) -> int:
        """Получение длины содержимого документа"""
        return len(self.content)

    def get_word_count(self) -> int:
        """Подсчет количества слов в документе"""
        if not self.content.strip():
            return 0
        return len(self.content.split())

    @classmethod
    def create_document(cls, title: str, owner_id: str) -> "Document":
        """Создание нового документа (без версии, она создается отдельно)"""
        return cls(
            id=None,
            title=title,
            owner_id=owner_id
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Document(id={self.id}, title={self.title}, current_version_id={self.current_version_id})"


class DocumentVersion:
    """Сущность версии документа. Содержимое версии не меняется после создания"""

    def __init__(
        self,
        id: Optional[int],
        document_id: int,
        content: str,
        version_number: int,
        created_by: str,
        suggestion_id: Optional[int] = None,
        created_at: Optional[datetime] = None
    ):
        self.id = id
        self.document_id = document_id
        self.content = content
        self.version_number = version_number
        self.created_by = created_by
        self.suggestion_id = suggestion_id
        self.created_at = created_at or datetime.utcnow()

    def get_content_length(self) -> int:
        return len(self.content)

    def get_word_count(self) -> int:
        if not self.content.strip():
            return 0
        return len(self.content.split())

    @classmethod
    def create_version(
        cls,
        document_id: int,
        content: str,
        version_number: int,
        created_by: str,
        suggestion_id: Optional[int] = None
    ) -> "DocumentVersion":
        """Создание новой версии документа"""
        return cls(
            id=None,
            document_id=document_id,
            content=content,
            version_number=version_number,
            created_by=created_by,
            suggestion_id=suggestion_id
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, DocumentVersion):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"DocumentVersion(id={self.id}, document_id={self.document_id}, version={self.version_number})"


class DocumentAccess:
    """Правила доступа к документу. Только решения, без обращений к хранилищу"""

    def __init__(self, document_id: int, owner_id: str):
        self.document_id = document_id
        self.owner_id = owner_id

    @classmethod
    def for_document(cls, document: Document) -> "DocumentAccess":
        return cls(document.id, document.owner_id)

    def is_owner(self, user_id: Optional[str]) -> bool:
        """Проверка является ли пользователь владельцем"""
        return bool(user_id) and user_id == self.owner_id

    def can_suggest(self, user_id: Optional[str]) -> bool:
        """Предлагать изменения может любой пользователь с известной идентичностью"""
        return bool(user_id)

    def can_accept(self, user_id: Optional[str]) -> bool:
        """Принимать предложения может только владелец"""
        return self.is_owner(user_id)

    def can_reject(self, user_id: Optional[str]) -> bool:
        return self.is_owner(user_id)

    def can_delete(self, user_id: Optional[str]) -> bool:
        """Удалять документ может только владелец"""
        return self.is_owner(user_id)
