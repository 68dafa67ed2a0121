# tests/fakes.py

"""
In-memory DocumentStore used by the tests in place of Supabase.
"""

import copy
import operator
import threading

from core.document_store import DocumentStore, new_document_id, validate_where
from core.errors import StoreError


_COMPARATORS = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def _matches(doc, clauses):
    for field, op, value in clauses:
        current = doc.get(field)
        if op == "in":
            if current not in value:
                return False
            continue
        if op in ("<", "<=", ">", ">=") and current is None:
            return False
        try:
            if not _COMPARATORS[op](current, value):
                return False
        except TypeError:
            return False
    return True


class FakeDocumentStore(DocumentStore):

    def __init__(self, data=None):
        self.collections = {name: {d["id"]: dict(d) for d in docs} for name, docs in (data or {}).items()}
        self.lock = threading.Lock()
        # collection names whose writes raise StoreError
        self.fail_on_add = set()
        self.fail_on_list = set()
        self.cas_calls = 0

    def _docs(self, collection):
        return self.collections.setdefault(collection, {})

    def seed(self, collection, *docs):
        for doc in docs:
            doc = dict(doc)
            doc.setdefault("id", new_document_id())
            self._docs(collection)[doc["id"]] = doc
        return docs

    def list(self, collection, where=None, *, order_by=None, descending=True, limit=None):
        if collection in self.fail_on_list:
            raise StoreError(f"Failed to fetch from {collection}", "injected failure")
        clauses = validate_where(where)
        with self.lock:
            rows = [copy.deepcopy(d) for d in self._docs(collection).values() if _matches(d, clauses)]
        if order_by:
            present = [r for r in rows if r.get(order_by) is not None]
            missing = [r for r in rows if r.get(order_by) is None]
            rows = sorted(present, key=lambda r: r[order_by], reverse=descending) + missing
        if limit:
            rows = rows[:limit]
        return rows

    def count(self, collection, where=None):
        return len(self.list(collection, where))

    def get(self, collection, doc_id):
        with self.lock:
            doc = self._docs(collection).get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def add(self, collection, data):
        if collection in self.fail_on_add:
            raise StoreError(f"Failed to insert into {collection}", "injected failure")
        doc = dict(data)
        doc.setdefault("id", new_document_id())
        with self.lock:
            self._docs(collection)[doc["id"]] = doc
        return copy.deepcopy(doc)

    def set(self, collection, doc_id, data):
        doc = {**data, "id": doc_id}
        with self.lock:
            self._docs(collection)[doc_id] = doc
        return copy.deepcopy(doc)

    def update(self, collection, doc_id, data):
        with self.lock:
            doc = self._docs(collection).get(doc_id)
            if doc is None:
                return None
            doc.update({k: v for k, v in data.items() if k != "id"})
            return copy.deepcopy(doc)

    def delete(self, collection, doc_id):
        with self.lock:
            return self._docs(collection).pop(doc_id, None) is not None

    def compare_and_set(self, collection, doc_id, field, expected, value, extra=None):
        with self.lock:
            self.cas_calls += 1
            doc = self._docs(collection).get(doc_id)
            if doc is None or doc.get(field) != expected:
                return False
            doc.update(extra or {})
            doc[field] = value
            return True
