"""
In-process implementation of the record store.
"""
from typing import Any, Dict, Iterable, List, Optional

from iot_ticketing.domains.errors import DuplicateIdError, NotFoundError
from iot_ticketing.interfaces.repositories.record_store import RecordStore, T


def _matches(record: Any, filters: Dict[str, Any]) -> bool:
    return all(getattr(record, key, None) == value for key, value in filters.items())


class InMemoryRecordStore(RecordStore[T]):
    """Record store backed by a Python list, owned by the creating process."""

    def __init__(self, records: Optional[Iterable[T]] = None):
        self._records: List[T] = [r.model_copy(deep=True) for r in records or []]

    def _index_of(self, record_id: str) -> int:
        for i, record in enumerate(self._records):
            if record.id == record_id:
                return i
        return -1

    def list(self) -> List[T]:
        return [r.model_copy(deep=True) for r in self._records]

    def get(self, record_id: str) -> Optional[T]:
        i = self._index_of(record_id)
        return self._records[i].model_copy(deep=True) if i >= 0 else None

    def insert_front(self, record: T) -> None:
        if self._index_of(record.id) >= 0:
            raise DuplicateIdError(f"Record {record.id} already exists")
        self._records.insert(0, record.model_copy(deep=True))

    def replace(self, record: T) -> None:
        i = self._index_of(record.id)
        if i < 0:
            raise NotFoundError(f"Record {record.id} not found")
        self._records[i] = record.model_copy(deep=True)

    def find(self, filters: Dict[str, Any]) -> List[T]:
        return [r.model_copy(deep=True) for r in self._records if _matches(r, filters)]

    def update_many(self, filters: Dict[str, Any], changes: Dict[str, Any]) -> int:
        matched = 0
        for i, record in enumerate(self._records):
            if _matches(record, filters):
                self._records[i] = record.model_copy(update=changes)
                matched += 1
        return matched

    def count(self, filters: Dict[str, Any]) -> int:
        return sum(1 for r in self._records if _matches(r, filters))
