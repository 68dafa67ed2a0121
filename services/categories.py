# services/categories.py

from typing import List

from core.cache import cache_delete, cache_get, cache_set
from core.config import settings
from core.document_store import DocumentStore
from core.errors import ConflictError, NotFoundError, ValidationError
from core.logging_config import logger
from core.timestamps import utcnow_iso


CATEGORIES = "categories"
RESOURCES = "resources"

CATEGORY_LIST_CACHE_KEY = "categories:list"


def list_categories(store: DocumentStore) -> List[dict]:
    cached = cache_get(CATEGORY_LIST_CACHE_KEY)
    if cached is not None:
        return cached

    categories = store.list(CATEGORIES, order_by="name", descending=False)
    cache_set(CATEGORY_LIST_CACHE_KEY, categories, ttl_seconds=settings.CATEGORY_CACHE_TTL)
    return categories


def get_category(store: DocumentStore, category_id: str) -> dict:
    category = store.get(CATEGORIES, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


def create_category(store: DocumentStore, name: str) -> dict:
    """Names are trimmed and must be unique (exact match)."""
    category_name = (name or "").strip()
    if not category_name:
        raise ValidationError("Category name is required")

    if store.list(CATEGORIES, [("name", "==", category_name)], limit=1):
        raise ConflictError("Category already exists")

    created = store.add(CATEGORIES, {"name": category_name, "createdAt": utcnow_iso()})
    cache_delete(CATEGORY_LIST_CACHE_KEY)
    logger.info(f"Category '{category_name}' created ({created.get('id')})")
    return created


def delete_category(store: DocumentStore, category_id: str) -> dict:
    """
    Delete a category nobody uses.
    Raises ConflictError while any resource still references its name.
    """
    category = get_category(store, category_id)

    if store.list(RESOURCES, [("category", "==", category.get("name"))], limit=1):
        raise ConflictError("Cannot delete category that is being used by resources")

    if not store.delete(CATEGORIES, category_id):
        raise NotFoundError("Category not found")

    cache_delete(CATEGORY_LIST_CACHE_KEY)
    logger.info(f"Category '{category.get('name')}' deleted ({category_id})")
    return category
