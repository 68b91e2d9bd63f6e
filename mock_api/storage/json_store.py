from pathlib import Path
import copy
import json
import logging
import time
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Document = Dict[str, List[Any]]

DEFAULT_DOCUMENT: Document = {
    "users": [
        {"id": 1, "name": "Alice Johnson", "email": "alice@example.com", "role": "admin"},
        {"id": 2, "name": "Bob Smith", "email": "bob@example.com", "role": "user"},
        {"id": 3, "name": "Charlie Brown", "email": "charlie@example.com", "role": "user"},
    ],
    "posts": [
        {"id": 1, "userId": 1, "title": "First Post", "content": "Hello World!", "likes": 42},
        {"id": 2, "userId": 2, "title": "Second Post", "content": "Mock APIs are great!", "likes": 15},
    ],
    "products": [
        {"id": 1, "name": "Laptop", "price": 999.99, "stock": 50},
        {"id": 2, "name": "Mouse", "price": 29.99, "stock": 200},
        {"id": 3, "name": "Keyboard", "price": 79.99, "stock": 100},
    ],
}


class StoreError(Exception):
    """Base class for errors surfaced to API clients."""

    message = "Store error"

    def __init__(self, collection: str, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.collection = collection


class NotFound(StoreError):
    message = "Not found"


class CollectionNotFound(NotFound):
    message = "Collection not found"


class ItemNotFound(NotFound):
    message = "Item not found"

    def __init__(self, collection: str, item_id: Any = None):
        super().__init__(collection)
        self.item_id = item_id


def current_millis() -> int:
    return int(time.time() * 1000)


class CollectionStore:
    """JSON-on-disk collections: one file holding every collection.

    The whole document lives in memory; every mutation rewrites the file.
    Records are matched by their numeric ``id`` with first-match semantics.
    """

    def __init__(self, data_file: Optional[Path] = None, indent: int = 2,
                 id_factory: Callable[[], int] = current_millis):
        self.data_file = Path(data_file) if data_file is not None else None
        self.indent = indent
        self._id_factory = id_factory
        self._last_id = 0
        self.data: Document = self.load() if self.data_file is not None else copy.deepcopy(DEFAULT_DOCUMENT)

    def init_app(self, app):
        self.data_file = Path(app.config["DATA_FILE"])
        self.indent = app.config.get("JSON_INDENT", 2)
        self.reload()
        app.extensions["collection_store"] = self

    # -----------------------------
    # Persistence
    # -----------------------------
    def load(self) -> Document:
        p = self.data_file
        if not p.exists():
            logger.warning("Data file %s not found, using default collections", p)
            return copy.deepcopy(DEFAULT_DOCUMENT)
        try:
            with p.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not load %s (%s), using default collections", p, e)
            return copy.deepcopy(DEFAULT_DOCUMENT)
        if not isinstance(data, dict):
            logger.warning("Could not load %s (top-level value is not an object), using default collections", p)
            return copy.deepcopy(DEFAULT_DOCUMENT)
        return data

    def reload(self):
        self.data = self.load()
        self._last_id = 0

    def save(self):
        if self.data_file is None:
            return
        try:
            with self.data_file.open("w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=self.indent, ensure_ascii=False)
        except (OSError, TypeError, ValueError):
            logger.exception("Error saving data to %s", self.data_file)

    # -----------------------------
    # Lookup helpers
    # -----------------------------
    def collections(self) -> List[str]:
        return list(self.data.keys())

    def _collection(self, collection: str) -> List[Any]:
        items = self.data.get(collection)
        if not isinstance(items, list):
            raise CollectionNotFound(collection)
        return items

    @staticmethod
    def _matches(item: Any, item_id: Any) -> bool:
        if not isinstance(item, dict):
            return False
        value = item.get("id")
        # bool is an int subclass but never equal to a numeric id in JSON terms
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return value == item_id

    def _index_of(self, collection: str, item_id: Any) -> int:
        items = self._collection(collection)
        for i, item in enumerate(items):
            if self._matches(item, item_id):
                return i
        raise ItemNotFound(collection, item_id)

    def _next_id(self) -> int:
        new_id = self._id_factory()
        if new_id <= self._last_id:
            new_id = self._last_id + 1
        self._last_id = new_id
        return new_id

    # -----------------------------
    # CRUD
    # -----------------------------
    def list(self, collection: str) -> List[Any]:
        return self._collection(collection)

    def create(self, collection: str, body: Dict[str, Any]) -> Record:
        items = self._collection(collection)
        item = {"id": self._next_id(), **body}
        items.append(item)
        self.save()
        return item

    def update(self, collection: str, item_id: Any, body: Dict[str, Any]) -> Record:
        idx = self._index_of(collection, item_id)
        items = self.data[collection]
        items[idx] = {**items[idx], **body}
        self.save()
        return items[idx]

    def delete(self, collection: str, item_id: Any):
        idx = self._index_of(collection, item_id)
        del self.data[collection][idx]
        self.save()
