# tests/test_categories.py

import pytest

from core.errors import ConflictError, NotFoundError, ValidationError
from services import categories as category_service


def test_create_category_trims_name(store):
    created = category_service.create_category(store, "  Seeds ")
    assert created["name"] == "Seeds"
    assert store.get("categories", created["id"])["name"] == "Seeds"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_category_name(store, name):
    with pytest.raises(ValidationError):
        category_service.create_category(store, name)


def test_duplicate_category(store):
    category_service.create_category(store, "Seeds")
    with pytest.raises(ConflictError):
        category_service.create_category(store, "Seeds ")
    assert len(store.list("categories")) == 1


def test_category_in_use_cannot_be_deleted(store):
    seeds = category_service.create_category(store, "Seeds")
    store.seed("resources", {"id": "r1", "name": "Maize Seeds", "category": "Seeds", "quantity": 3})

    with pytest.raises(ConflictError):
        category_service.delete_category(store, seeds["id"])

    assert store.get("categories", seeds["id"]) is not None


def test_unused_category_is_deleted(store):
    tools = category_service.create_category(store, "Tools")
    deleted = category_service.delete_category(store, tools["id"])

    assert deleted["name"] == "Tools"
    assert store.get("categories", tools["id"]) is None


def test_delete_unknown_category(store):
    with pytest.raises(NotFoundError):
        category_service.delete_category(store, "nope")


def test_list_is_cached_until_a_write(store):
    category_service.create_category(store, "Water")
    first = category_service.list_categories(store)

    # Written behind the service's back: the cached list is still served
    store.seed("categories", {"id": "x", "name": "Books"})
    assert category_service.list_categories(store) == first

    category_service.create_category(store, "Clothing")
    names = [c["name"] for c in category_service.list_categories(store)]
    assert names == ["Books", "Clothing", "Water"]
