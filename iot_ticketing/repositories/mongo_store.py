"""
MongoDB implementation of the record store.
"""
from typing import Any, Dict, List, Optional, Type

from pydantic_core import to_jsonable_python

from iot_ticketing.domains.errors import DuplicateIdError, NotFoundError
from iot_ticketing.interfaces.providers.data_storage import DataStorageProvider
from iot_ticketing.interfaces.repositories.record_store import RecordStore, T

SEQ_FIELD = "_seq"


class MongoRecordStore(RecordStore[T]):
    """Record store persisted in a MongoDB collection.

    Store order is kept with a monotonically increasing ``_seq`` field;
    the highest sequence is the front of the collection.
    """

    def __init__(self, db_adapter: DataStorageProvider, collection: str, model_class: Type[T]):
        """Initialize the store with a database adapter.

        Args:
            db_adapter: Document storage adapter
            collection: Collection name
            model_class: Pydantic model the documents are validated into
        """
        self.db = db_adapter
        self.collection = collection
        self.model_class = model_class

        self.db.create_collection(self.collection)
        self.db.create_index(self.collection, [("id", 1)], unique=True)
        self.db.create_index(self.collection, [(SEQ_FIELD, -1)])

    def _to_document(self, record: T) -> Dict[str, Any]:
        return record.model_dump(mode="json")

    def _from_document(self, doc: Dict[str, Any]) -> T:
        data = {k: v for k, v in doc.items() if k not in ("_id", SEQ_FIELD)}
        return self.model_class.model_validate(data)

    def _next_seq(self) -> int:
        docs = self.db.find(self.collection, {}, sort=[(SEQ_FIELD, -1)], limit=1)
        return docs[0][SEQ_FIELD] + 1 if docs else 1

    def list(self) -> List[T]:
        return self.find({})

    def get(self, record_id: str) -> Optional[T]:
        doc = self.db.find_one(self.collection, {"id": record_id})
        if not doc:
            return None
        return self._from_document(doc)

    def insert_front(self, record: T) -> None:
        if self.db.find_one(self.collection, {"id": record.id}):
            raise DuplicateIdError(f"Record {record.id} already exists")

        doc = self._to_document(record)
        doc["_id"] = record.id
        doc[SEQ_FIELD] = self._next_seq()
        self.db.insert_one(self.collection, doc)

    def replace(self, record: T) -> None:
        existing = self.db.find_one(self.collection, {"id": record.id})
        if not existing:
            raise NotFoundError(f"Record {record.id} not found")

        doc = self._to_document(record)
        doc["_id"] = existing["_id"]
        doc[SEQ_FIELD] = existing[SEQ_FIELD]
        self.db.replace_one(self.collection, {"id": record.id}, doc)

    def find(self, filters: Dict[str, Any]) -> List[T]:
        docs = self.db.find(
            self.collection,
            to_jsonable_python(filters),
            sort=[(SEQ_FIELD, -1)],
        )
        return [self._from_document(doc) for doc in docs]

    def update_many(self, filters: Dict[str, Any], changes: Dict[str, Any]) -> int:
        return self.db.update_many(
            self.collection,
            to_jsonable_python(filters),
            {"$set": to_jsonable_python(changes)},
        )

    def count(self, filters: Dict[str, Any]) -> int:
        return self.db.count_documents(self.collection, to_jsonable_python(filters))
