# core/document_store.py

"""
Document store interface used by the routers and the inventory ledger.

Collections map to Supabase tables and a document's id lives in the ``id``
column. Every document leaving the store has its timestamp fields
normalized (see core.timestamps); every client failure is re-raised as
StoreError so callers never see raw PostgREST exceptions.
"""

import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from supabase import Client

from core.errors import StoreError, extract_store_error
from core.logging_config import logger
from core.timestamps import normalize_document, serialize_for_store


# (field, operator, value): same shape as a Firestore where() clause
WhereClause = Tuple[str, str, Any]

SUPPORTED_OPERATORS = ("==", "!=", "<", "<=", ">", ">=", "in")


class DocumentStore(ABC):
    """
    Read/write contract shared by the Supabase adapter and test fakes.
    """

    @abstractmethod
    def list(
        self,
        collection: str,
        where: Optional[Sequence[WhereClause]] = None,
        *,
        order_by: Optional[str] = None,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> List[dict]:
        pass

    @abstractmethod
    def count(self, collection: str, where: Optional[Sequence[WhereClause]] = None) -> int:
        pass

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        pass

    @abstractmethod
    def add(self, collection: str, data: dict) -> dict:
        """Insert a new document; an id is generated when absent."""
        pass

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: dict) -> dict:
        """Create or overwrite the document with a caller-chosen id."""
        pass

    @abstractmethod
    def update(self, collection: str, doc_id: str, data: dict) -> Optional[dict]:
        """Merge fields into a document. Returns None when it does not exist."""
        pass

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> bool:
        pass

    @abstractmethod
    def compare_and_set(
        self,
        collection: str,
        doc_id: str,
        field: str,
        expected: Any,
        value: Any,
        extra: Optional[dict] = None,
    ) -> bool:
        """
        Write `value` (plus `extra`) only if `field` still equals `expected`.
        Returns False when another writer got there first or the document
        is gone.
        """
        pass


def new_document_id() -> str:
    return uuid.uuid4().hex


def validate_where(where: Optional[Iterable[WhereClause]]) -> List[WhereClause]:
    clauses = list(where or [])
    for field, op, _ in clauses:
        if op not in SUPPORTED_OPERATORS:
            raise ValueError(f"Unsupported operator '{op}' on field '{field}'")
    return clauses


# ============================================================
# Supabase adapter
# ============================================================
class SupabaseDocumentStore(DocumentStore):

    def __init__(self, client: Client):
        self.client = client

    @contextmanager
    def _guard(self, operation: str):
        try:
            yield
        except StoreError:
            raise
        except Exception as e:
            detail = extract_store_error(e)
            logger.error(f"{operation}: {detail}")
            raise StoreError(operation, detail) from e

    @staticmethod
    def _apply_where(query, where: Optional[Sequence[WhereClause]]):
        for field, op, value in validate_where(where):
            if value is None and op in ("==", "!="):
                # PostgREST matches NULL with IS, not =
                query = query.is_(field, "null") if op == "==" else query.not_.is_(field, "null")
            elif op == "==":
                query = query.eq(field, value)
            elif op == "!=":
                query = query.neq(field, value)
            elif op == "<":
                query = query.lt(field, value)
            elif op == "<=":
                query = query.lte(field, value)
            elif op == ">":
                query = query.gt(field, value)
            elif op == ">=":
                query = query.gte(field, value)
            elif op == "in":
                query = query.in_(field, list(value))
        return query

    def list(self, collection, where=None, *, order_by=None, descending=True, limit=None):
        with self._guard(f"Failed to fetch from {collection}"):
            query = self._apply_where(self.client.table(collection).select("*"), where)
            if order_by:
                query = query.order(order_by, desc=descending)
            if limit:
                query = query.limit(limit)
            result = query.execute()
        return [normalize_document(row) for row in (result.data or [])]

    def count(self, collection, where=None):
        with self._guard(f"Failed to count {collection}"):
            query = self._apply_where(
                self.client.table(collection).select("id", count="exact"), where
            )
            result = query.execute()
        if result.count is not None:
            return result.count
        return len(result.data or [])

    def get(self, collection, doc_id):
        with self._guard(f"Failed to fetch {collection}/{doc_id}"):
            result = (
                self.client.table(collection)
                .select("*")
                .eq("id", doc_id)
                .limit(1)
                .execute()
            )
        rows = result.data or []
        return normalize_document(rows[0]) if rows else None

    def add(self, collection, data):
        payload = serialize_for_store(data)
        payload.setdefault("id", new_document_id())

        with self._guard(f"Failed to insert into {collection}"):
            result = self.client.table(collection).insert(payload).execute()

        if not result.data:
            raise StoreError(f"Failed to insert into {collection}", "insert returned no data")
        return normalize_document(result.data[0])

    def set(self, collection, doc_id, data):
        payload = serialize_for_store({**data, "id": doc_id})

        with self._guard(f"Failed to write {collection}/{doc_id}"):
            result = self.client.table(collection).upsert(payload).execute()

        if not result.data:
            raise StoreError(f"Failed to write {collection}/{doc_id}", "upsert returned no data")
        return normalize_document(result.data[0])

    def update(self, collection, doc_id, data):
        payload = serialize_for_store(data)
        payload.pop("id", None)

        with self._guard(f"Failed to update {collection}/{doc_id}"):
            result = (
                self.client.table(collection)
                .update(payload)
                .eq("id", doc_id)
                .execute()
            )
        rows = result.data or []
        return normalize_document(rows[0]) if rows else None

    def delete(self, collection, doc_id):
        with self._guard(f"Failed to delete {collection}/{doc_id}"):
            result = (
                self.client.table(collection)
                .delete()
                .eq("id", doc_id)
                .execute()
            )
        return bool(result.data)

    def compare_and_set(self, collection, doc_id, field, expected, value, extra=None):
        payload = serialize_for_store({**(extra or {}), field: value})

        with self._guard(f"Failed conditional update of {collection}/{doc_id}"):
            result = (
                self.client.table(collection)
                .update(payload)
                .eq("id", doc_id)
                .eq(field, expected)
                .execute()
            )
        return bool(result.data)

    def ping(self, collections: Sequence[str]) -> dict:
        """
        Connectivity check for the health router.
        One row per collection; errors are reported, not raised.
        """
        results = {}
        for name in collections:
            try:
                res = self.client.table(name).select("id").limit(1).execute()
                results[name] = {"status": "ok", "rows_found": len(res.data or [])}
            except Exception as err:
                results[name] = {"status": "error", "detail": extract_store_error(err)}
        return results
