"""
Canteen Console — Document repository contract

The remote document store is consumed through three calls only:
  - get_all(collection)        → every record, each carrying its "id"
  - set(collection, id, record) → full upsert, replaces the record at id
  - delete(collection, id)     → remove; a missing id is not an error

Backends wrap their own errors into PersistenceError.
"""
import copy
from abc import ABC, abstractmethod

from canteen.core.exceptions import PersistenceError


class DocumentRepository(ABC):
    name: str = "abstract"

    @abstractmethod
    async def get_all(self, collection: str) -> list[dict]:
        ...

    @abstractmethod
    async def set(self, collection: str, doc_id: str, record: dict) -> None:
        ...

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        ...

    async def ping(self) -> None:
        """Raise PersistenceError when the backend is unreachable."""

    async def close(self) -> None:
        pass


def with_id(doc_id: str, body: dict) -> dict:
    return {**body, "id": doc_id}


class InMemoryDocumentRepository(DocumentRepository):
    """Process-local store. Records are deep-copied in and out."""

    name = "memory"

    def __init__(self, seed: dict[str, dict[str, dict]] | None = None):
        self._collections: dict[str, dict[str, dict]] = {}
        for collection, records in (seed or {}).items():
            for doc_id, record in records.items():
                self._collections.setdefault(collection, {})[str(doc_id)] = copy.deepcopy(record)

    async def get_all(self, collection: str) -> list[dict]:
        records = self._collections.get(collection, {})
        return [with_id(doc_id, copy.deepcopy(body)) for doc_id, body in records.items()]

    async def set(self, collection: str, doc_id: str, record: dict) -> None:
        if not doc_id:
            raise PersistenceError("Document id must not be empty.")
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(record)

    async def delete(self, collection: str, doc_id: str) -> None:
        self._collections.get(collection, {}).pop(doc_id, None)
