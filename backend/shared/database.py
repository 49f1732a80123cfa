"""
In-memory document store.

Persistence is a collaborator behind a small CRUD surface: named
collections of dict documents keyed by 24-character hex ids. This
implementation keeps everything in process memory; a real document
database can replace it by exposing the same collection methods.
"""

import copy
import os
import time
from datetime import datetime, timezone
from typing import Any, Callable, Optional

Document = dict[str, Any]
Predicate = Callable[[Document], bool]


def new_object_id() -> str:
    """
    Generate a 24-character hex document id.

    Layout mirrors a BSON ObjectId: 4 bytes of seconds since epoch
    followed by 8 random bytes, so ids sort roughly by creation time.
    """
    return int(time.time()).to_bytes(4, "big").hex() + os.urandom(8).hex()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentCollection:
    """A named set of documents with basic CRUD operations."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._documents: dict[str, Document] = {}

    async def insert(self, document: Document) -> Document:
        """Store a new document, assigning id and timestamps."""
        now = utcnow()
        stored = copy.deepcopy(document)
        stored["id"] = stored.get("id") or new_object_id()
        stored.setdefault("created_at", now)
        stored["updated_at"] = now
        self._documents[stored["id"]] = stored
        return copy.deepcopy(stored)

    async def insert_many(self, documents: list[Document]) -> list[Document]:
        return [await self.insert(document) for document in documents]

    async def find_by_id(self, document_id: str) -> Optional[Document]:
        document = self._documents.get(document_id)
        return copy.deepcopy(document) if document is not None else None

    async def find_one(self, **fields: Any) -> Optional[Document]:
        """Return the first document whose fields equal the given values."""
        for document in self._documents.values():
            if all(document.get(key) == value for key, value in fields.items()):
                return copy.deepcopy(document)
        return None

    async def find(
        self,
        where: Optional[Predicate] = None,
        sort_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[Document]:
        """Return documents matching a predicate, optionally sorted."""
        matches = [
            copy.deepcopy(document)
            for document in self._documents.values()
            if where is None or where(document)
        ]
        if sort_by is not None:
            matches.sort(key=lambda document: document[sort_by], reverse=descending)
        if limit is not None:
            matches = matches[:limit]
        return matches

    async def count(self, where: Optional[Predicate] = None) -> int:
        return sum(
            1 for document in self._documents.values() if where is None or where(document)
        )

    async def update(self, document_id: str, changes: Document) -> Optional[Document]:
        """Apply field changes to a document. Returns None if it doesn't exist."""
        document = self._documents.get(document_id)
        if document is None:
            return None
        document.update(copy.deepcopy(changes))
        document["updated_at"] = utcnow()
        return copy.deepcopy(document)

    async def delete(self, document_id: str) -> bool:
        return self._documents.pop(document_id, None) is not None

    async def delete_many(self, where: Predicate) -> int:
        doomed = [key for key, document in self._documents.items() if where(document)]
        for key in doomed:
            del self._documents[key]
        return len(doomed)


class DocumentStore:
    """Registry of collections, created lazily by name."""

    def __init__(self) -> None:
        self._collections: dict[str, DocumentCollection] = {}

    def collection(self, name: str) -> DocumentCollection:
        if name not in self._collections:
            self._collections[name] = DocumentCollection(name)
        return self._collections[name]
