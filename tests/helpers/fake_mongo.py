"""
In-memory stand-ins for motor database and collection handles.

They implement only what the wrapper's checked operations call, with simple
equality matching (dotted paths descend into embedded documents and arrays).
Good enough to assert on collection contents before and after an operation.
"""

import copy
from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult


def _values_at(document: Dict[str, Any], path: str) -> List[Any]:
    values = [document]
    for part in path.split("."):
        found = []
        for value in values:
            if isinstance(value, list):
                found.extend(item[part] for item in value if isinstance(item, dict) and part in item)
            elif isinstance(value, dict) and part in value:
                found.append(value[part])
        values = found
    return values


def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    return all(expected in _values_at(document, path) for path, expected in query.items())


def _apply(document: Dict[str, Any], update: Dict[str, Any]) -> None:
    for operator, fields in update.items():
        for key, value in fields.items():
            if operator == "$set":
                document[key] = value
            elif operator == "$unset":
                document.pop(key, None)
            elif operator == "$inc":
                document[key] = document.get(key, 0) + value
            elif operator == "$push":
                document.setdefault(key, []).append(value)
            else:
                raise NotImplementedError(f"FakeCollection does not support {operator}")


class FakeCollection:
    """Async collection double keeping documents in a list."""

    def __init__(self, name: str, documents: Optional[List[Dict[str, Any]]] = None):
        self.name = name
        self.documents: List[Dict[str, Any]] = []
        self._next_id = 1
        for document in documents or []:
            self._store(dict(document))

    def _store(self, document: Dict[str, Any]) -> Any:
        if "_id" not in document:
            document["_id"] = self._next_id
            self._next_id += 1
        self.documents.append(copy.deepcopy(document))
        return document["_id"]

    def _first(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return next((doc for doc in self.documents if _matches(doc, query)), None)

    async def count_documents(self, query: Dict[str, Any], limit: int = 0, **kwargs: Any) -> int:
        count = sum(1 for doc in self.documents if _matches(doc, query))
        return min(count, limit) if limit else count

    async def find_one(self, query: Optional[Dict[str, Any]] = None, **kwargs: Any) -> Optional[Dict[str, Any]]:
        document = self._first(query or {})
        return copy.deepcopy(document) if document else None

    async def insert_one(self, document: Dict[str, Any], **kwargs: Any) -> InsertOneResult:
        inserted_id = self._store(document)
        return InsertOneResult(inserted_id, True)

    async def find_one_and_update(
        self,
        query: Dict[str, Any],
        update: Dict[str, Any],
        return_document: bool = ReturnDocument.BEFORE,
        **kwargs: Any
    ) -> Optional[Dict[str, Any]]:
        document = self._first(query)
        if document is None:
            return None
        before = copy.deepcopy(document)
        _apply(document, update)
        return copy.deepcopy(document) if return_document == ReturnDocument.AFTER else before

    async def find_one_and_delete(self, query: Dict[str, Any], **kwargs: Any) -> Optional[Dict[str, Any]]:
        document = self._first(query)
        if document is None:
            return None
        self.documents.remove(document)
        return document

    async def update_many(self, query: Dict[str, Any], update: Dict[str, Any], **kwargs: Any) -> UpdateResult:
        matched = [doc for doc in self.documents if _matches(doc, query)]
        for document in matched:
            _apply(document, update)
        return UpdateResult({"n": len(matched), "nModified": len(matched), "ok": 1.0}, True)

    async def delete_many(self, query: Dict[str, Any], **kwargs: Any) -> DeleteResult:
        matched = [doc for doc in self.documents if _matches(doc, query)]
        for document in matched:
            self.documents.remove(document)
        return DeleteResult({"n": len(matched), "ok": 1.0}, True)


class FakeDatabase:
    """Database double handing out FakeCollection instances by name."""

    def __init__(self, name: str = "test"):
        self.name = name
        self.collections: Dict[str, FakeCollection] = {}

    def get_collection(self, name: str, **options: Any) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]
