import pytest

from app.core.errors import ForbiddenError, NotFoundError, UnauthorizedError, ValidationError
from app.db.repositories import ChangeSuggestionRepository, DocumentVersionRepository
from app.domains.documents.services import DocumentService, DocumentVersionService
from app.domains.suggestions.services import SuggestionService


async def test_create_document_yields_exactly_one_initial_version(session):
    service = DocumentService(session)

    document = await service.create_document("alice", "Handbook", "A")

    assert document.id is not None
    assert document.current_version_id is not None
    assert document.current_version.content == "A"
    assert document.current_version.version_number == 1

    versions, total = await DocumentVersionService(session).list_versions(document.id)
    assert total == 1
    assert versions[0].id == document.current_version_id


async def test_get_document_attaches_current_version(session, document):
    loaded = await DocumentService(session).get_document(document.id)

    assert loaded.owner_id == "alice"
    assert loaded.title == "Handbook"
    assert loaded.current_version_id == document.current_version_id
    assert loaded.content == "A"


async def test_get_unknown_document_raises_not_found(session):
    with pytest.raises(NotFoundError):
        await DocumentService(session).get_document(999)


async def test_create_document_requires_owner_and_title(session):
    service = DocumentService(session)

    with pytest.raises(UnauthorizedError):
        await service.create_document(None, "Handbook", "A")
    with pytest.raises(ValidationError):
        await service.create_document("alice", "   ", "A")

    documents, total = await service.list_documents()
    assert documents == []
    assert total == 0


async def test_list_documents_filters_by_owner(session):
    service = DocumentService(session)
    await service.create_document("alice", "One", "1")
    await service.create_document("bob", "Two", "2")
    await service.create_document("alice", "Three", "3")

    documents, total = await service.list_documents(owner_id="alice")

    assert total == 2
    assert [d.title for d in documents] == ["Three", "One"]


async def test_owner_delete_cascades_versions_and_suggestions(session, document):
    suggestion = await SuggestionService(session).submit(document.id, "bob", "Fix", "B")

    await DocumentService(session).delete_document(document.id, "alice")

    with pytest.raises(NotFoundError):
        await DocumentService(session).get_document(document.id)
    assert await DocumentVersionRepository(session).get_by_id(document.current_version_id) is None
    assert await ChangeSuggestionRepository(session).get_by_id(suggestion.id) is None


async def test_non_owner_delete_leaves_everything_intact(session, document):
    suggestion = await SuggestionService(session).submit(document.id, "bob", "Fix", "B")

    with pytest.raises(ForbiddenError):
        await DocumentService(session).delete_document(document.id, "bob")
    with pytest.raises(ForbiddenError):
        await DocumentService(session).delete_document(document.id, None)

    loaded = await DocumentService(session).get_document(document.id)
    assert loaded.content == "A"
    assert await DocumentVersionRepository(session).get_by_id(document.current_version_id) is not None
    assert await ChangeSuggestionRepository(session).get_by_id(suggestion.id) is not None


async def test_delete_unknown_document_raises_not_found(session):
    with pytest.raises(NotFoundError):
        await DocumentService(session).delete_document(404, "alice")
