"""
MongoDB adapter for the IoT ticketing system.

This adapter implements the DataStorageProvider interface for MongoDB.
"""
import uuid
from typing import Any, Dict, List, Optional, Tuple

from pymongo import MongoClient

from iot_ticketing.interfaces.providers.data_storage import DataStorageProvider


class MongoDBAdapter(DataStorageProvider):
    """MongoDB implementation of DataStorageProvider."""

    def __init__(self, connection_string: str, database_name: str):
        self.client = MongoClient(connection_string)
        self.db = self.client[database_name]

    def create_collection(self, name: str) -> None:
        if name not in self.db.list_collection_names():
            self.db.create_collection(name)

    def collection_exists(self, name: str) -> bool:
        return name in self.db.list_collection_names()

    def insert_one(self, collection: str, document: Dict[str, Any]) -> str:
        if "_id" not in document:
            document["_id"] = str(uuid.uuid4())
        self.db[collection].insert_one(document)
        return document["_id"]

    def find_one(self, collection: str, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self.db[collection].find_one(query)

    def find(
        self,
        collection: str,
        query: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        cursor = self.db[collection].find(query)
        if sort:
            cursor = cursor.sort(sort)
        if limit > 0:
            cursor = cursor.limit(limit)
        return list(cursor)

    def replace_one(self, collection: str, query: Dict[str, Any], document: Dict[str, Any]) -> bool:
        result = self.db[collection].replace_one(query, document)
        return result.matched_count > 0

    def update_many(self, collection: str, query: Dict[str, Any], update: Dict[str, Any]) -> int:
        result = self.db[collection].update_many(query, update)
        return result.matched_count

    def count_documents(self, collection: str, query: Dict[str, Any]) -> int:
        return self.db[collection].count_documents(query)

    def create_index(self, collection: str, keys: List[Tuple[str, int]], **kwargs) -> None:
        self.db[collection].create_index(keys, **kwargs)
