"""
In-memory content store for testing.

Implements both client interfaces by dispatching on the query constants
in src.storage.queries, so flows can run end to end without a Sanity
project. Data is stored in memory and lost when the process ends.
"""

import threading
import uuid
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from src.storage import queries
from src.storage.base import ContentClient, StoreError, WriteClient


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _matches(value: Optional[str], search: str) -> bool:
    """
    Case-insensitive term match, close to GROQ ``match``: every term of
    the search must occur in the value.
    """
    if not value:
        return False
    haystack = value.lower()
    return all(term in haystack for term in search.lower().split())


class MemoryContentStore(ContentClient, WriteClient):
    """
    Thread-safe in-memory store understanding the application's queries.

    Documents are kept in store shape (``_id``, ``_type``, references as
    ``{"_ref": ...}``) and projected the way the queries project them.
    """

    def __init__(self, documents: Optional[List[Dict[str, Any]]] = None):
        self._documents: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.RLock()
        self._handlers: Dict[str, Callable[[Dict[str, Any]], Any]] = {
            queries.STARTUPS_QUERY: self._query_startups,
            queries.STARTUP_BY_ID_QUERY: self._query_startup_by_id,
            queries.STARTUPS_BY_AUTHOR_QUERY: self._query_startups_by_author,
            queries.AUTHOR_BY_GITHUB_ID_QUERY: self._query_author_by_github_id,
            queries.AUTHOR_BY_ID_QUERY: self._query_author_by_id,
            queries.PLAYLIST_BY_SLUG_QUERY: self._query_playlist_by_slug,
        }
        for doc in documents or []:
            self.add(doc)

    @property
    def name(self) -> str:
        return "memory"

    def with_config(self, use_cdn: bool) -> "MemoryContentStore":
        # Nothing is cached, so both settings read the same data
        return self

    # =========================================================================
    # Reads
    # =========================================================================

    def fetch(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        handler = self._handlers.get(query)
        if handler is None:
            raise StoreError("Unsupported query for in-memory store")
        with self._lock:
            return deepcopy(handler(params or {}))

    def _of_type(self, doc_type: str) -> List[Dict[str, Any]]:
        return [d for d in self._documents.values() if d.get("_type") == doc_type]

    def _newest_first(self, docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return sorted(docs, key=lambda d: d.get("_createdAt", ""), reverse=True)

    def _deref(self, ref: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if not ref or "_ref" not in ref:
            return None
        return self._documents.get(ref["_ref"])

    def _project_author(self, doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if doc is None:
            return None
        keys = ("_id", "id", "name", "username", "email", "image", "bio")
        return {key: doc.get(key) for key in keys}

    def _project_startup(self, doc: Dict[str, Any], with_pitch: bool = False) -> Dict[str, Any]:
        keys = ["_id", "title", "slug", "_createdAt", "views", "description", "category", "image"]
        if with_pitch:
            keys.append("pitch")
        projected = {key: doc.get(key) for key in keys}
        author = self._project_author(self._deref(doc.get("author")))
        if author is not None:
            author.pop("email")
            author.pop("id")
        projected["author"] = author
        return projected

    def _query_startups(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        search = params.get("search")
        results = []
        for doc in self._newest_first(self._of_type("startup")):
            if not (doc.get("slug") or {}).get("current"):
                continue
            if search is not None:
                author = self._deref(doc.get("author")) or {}
                if not (
                    _matches(doc.get("title"), search)
                    or _matches(doc.get("category"), search)
                    or _matches(author.get("name"), search)
                ):
                    continue
            results.append(self._project_startup(doc))
        return results

    def _query_startup_by_id(self, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self._documents.get(params.get("id"))
        if doc is None or doc.get("_type") != "startup":
            return None
        return self._project_startup(doc, with_pitch=True)

    def _query_startups_by_author(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        author_id = params.get("id")
        return [
            self._project_startup(doc)
            for doc in self._newest_first(self._of_type("startup"))
            if (doc.get("author") or {}).get("_ref") == author_id
        ]

    def _query_author_by_github_id(self, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        external_id = params.get("id")
        for doc in self._of_type("author"):
            if doc.get("id") == external_id:
                return self._project_author(doc)
        return None

    def _query_author_by_id(self, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self._documents.get(params.get("id"))
        if doc is None or doc.get("_type") != "author":
            return None
        return self._project_author(doc)

    def _query_playlist_by_slug(self, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        slug = params.get("slug")
        for doc in self._of_type("playlist"):
            if (doc.get("slug") or {}).get("current") == slug:
                selected = []
                for ref in doc.get("select") or []:
                    target = self._deref(ref)
                    selected.append(
                        self._project_startup(target, with_pitch=True) if target else None
                    )
                return {
                    "_id": doc["_id"],
                    "title": doc.get("title"),
                    "slug": doc.get("slug"),
                    "select": selected,
                }
        return None

    # =========================================================================
    # Writes
    # =========================================================================

    def add(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert or replace a document as-is (for seeding)."""
        doc = deepcopy(document)
        doc.setdefault("_id", uuid.uuid4().hex)
        doc.setdefault("_createdAt", _now_iso())
        with self._lock:
            self._documents[doc["_id"]] = doc
        return deepcopy(doc)

    def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            if document.get("_id") in self._documents:
                raise StoreError(f"Document already exists: {document['_id']}")
            return self.add(document)

    def create_if_not_exists(self, document: Dict[str, Any]) -> Dict[str, Any]:
        if not document.get("_id"):
            raise ValueError("create_if_not_exists requires an explicit _id")
        with self._lock:
            existing = self._documents.get(document["_id"])
            if existing is not None:
                return deepcopy(existing)
            return self.add(document)

    def increment(self, document_id: str, field: str, amount: int = 1) -> None:
        with self._lock:
            doc = self._documents.get(document_id)
            if doc is None:
                raise StoreError(f"Document not found: {document_id}")
            doc[field] = (doc.get(field) or 0) + amount

    # =========================================================================
    # Test helpers
    # =========================================================================

    def get(self, document_id: str) -> Optional[Dict[str, Any]]:
        """Return a copy of a raw document."""
        with self._lock:
            doc = self._documents.get(document_id)
            return deepcopy(doc) if doc else None

    def count(self, doc_type: str = None) -> int:
        """Return number of stored documents, optionally of one type."""
        with self._lock:
            if doc_type is None:
                return len(self._documents)
            return len(self._of_type(doc_type))

    def clear(self) -> None:
        """Clear all documents."""
        with self._lock:
            self._documents.clear()
