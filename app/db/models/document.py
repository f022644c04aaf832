from datetime import datetime

from sqlalchemy import Column, String, Text, Integer, ForeignKey, DateTime, Enum, Index
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.domains.suggestions.entities import SuggestionStatus


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    owner_id = Column(String(255), nullable=False, index=True)
    # Ссылка на версию образует цикл documents <-> document_versions
    current_version_id = Column(
        Integer,
        ForeignKey("document_versions.id", use_alter=True, name="fk_documents_current_version_id"),
        nullable=True,
    )
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    versions = relationship(
        "DocumentVersion",
        foreign_keys="DocumentVersion.document_id",
        back_populates="document",
        passive_deletes=True,
    )
    suggestions = relationship("ChangeSuggestion", back_populates="document", passive_deletes=True)


class DocumentVersion(Base):
    __tablename__ = "document_versions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False)
    version_number = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    created_by = Column(String(255), nullable=False)
    suggestion_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    document = relationship("Document", foreign_keys=[document_id], back_populates="versions")

    __table_args__ = (
        Index("ix_document_versions_document_number", "document_id", "version_number", unique=True),
    )


class ChangeSuggestion(Base):
    __tablename__ = "change_suggestions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False)
    author_id = Column(String(255), nullable=False)
    base_version_id = Column(Integer, ForeignKey("document_versions.id", ondelete="CASCADE"), nullable=False)
    status = Column(
        Enum(SuggestionStatus, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
        default=SuggestionStatus.PENDING,
    )
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    resolved_at = Column(DateTime, nullable=True)
    resolved_by = Column(String(255), nullable=True)

    # Relationships
    document = relationship("Document", back_populates="suggestions")

    __table_args__ = (
        Index("ix_change_suggestions_document_created", "document_id", "created_at"),
    )
