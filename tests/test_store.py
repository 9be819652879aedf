import pytest

from backend.errors import NotFoundError, ValidationError
from backend.store import ContactStore


def test_insert_assigns_id_and_timestamps(db, ann):
    obj = ContactStore(db).insert(ann)
    assert len(obj.id) == 32
    assert obj.created_at is not None
    assert obj.updated_at is not None
    assert obj.message is None


@pytest.mark.parametrize("blank", [None, "", "   "])
def test_insert_rejects_blank_required_field(db, ann, blank):
    with pytest.raises(ValidationError) as err:
        ContactStore(db).insert({**ann, "phone": blank})
    assert err.value.missing == ["phone"]
    assert err.value.payload["errors"] == {"phone": "Path `phone` is required."}


def test_list_all_newest_first(db, ann):
    store = ContactStore(db)
    ids = [store.insert({**ann, "name": f"n{i}"}).id for i in range(3)]
    assert [c.id for c in store.list_all()] == list(reversed(ids))


def test_update_replaces_all_fields(db, ann):
    store = ContactStore(db)
    obj = store.insert({**ann, "message": "first"})
    created_at = obj.created_at
    updated = store.update_by_id(obj.id, {"name": "Ann B", "email": "x@y.z", "phone": "5555555555"})
    assert updated.id == obj.id
    assert updated.name == "Ann B"
    assert updated.message is None
    assert updated.created_at == created_at
    assert updated.updated_at >= created_at


def test_update_unknown_id_returns_none(db, ann):
    assert ContactStore(db).update_by_id("missing", ann) is None


def test_get_unknown_id_raises(db):
    with pytest.raises(NotFoundError):
        ContactStore(db).get("missing")


def test_delete_is_silent_for_unknown_id(db, ann):
    store = ContactStore(db)
    obj = store.insert(ann)
    store.delete_by_id(obj.id)
    store.delete_by_id(obj.id)
    assert store.list_all() == []
