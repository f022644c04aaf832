from app.domains.documents.entities import Document, DocumentAccess


def _access() -> DocumentAccess:
    return DocumentAccess.for_document(Document(id=1, title="Doc", owner_id="alice"))


def test_any_resolved_identity_can_suggest():
    access = _access()
    assert access.can_suggest("alice")
    assert access.can_suggest("bob")


def test_missing_identity_cannot_suggest():
    access = _access()
    assert not access.can_suggest(None)
    assert not access.can_suggest("")


def test_only_owner_can_accept_reject_and_delete():
    access = _access()
    assert access.can_accept("alice")
    assert access.can_reject("alice")
    assert access.can_delete("alice")

    assert not access.can_accept("bob")
    assert not access.can_reject("bob")
    assert not access.can_delete("bob")


def test_missing_identity_is_never_owner():
    access = DocumentAccess(document_id=1, owner_id="")
    assert not access.is_owner("")
    assert not access.is_owner(None)
    assert not access.can_delete(None)
