from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple


class DataStorageProvider(ABC):
    """Interface for document storage providers."""

    @abstractmethod
    def create_collection(self, name: str) -> None:
        """Create a new collection."""
        pass

    @abstractmethod
    def collection_exists(self, name: str) -> bool:
        """Check if collection exists."""
        pass

    @abstractmethod
    def insert_one(self, collection: str, document: Dict[str, Any]) -> str:
        """Insert a document into a collection."""
        pass

    @abstractmethod
    def find_one(self, collection: str, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Find a single document."""
        pass

    @abstractmethod
    def find(
        self,
        collection: str,
        query: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        """Find documents matching query."""
        pass

    @abstractmethod
    def replace_one(self, collection: str, query: Dict[str, Any], document: Dict[str, Any]) -> bool:
        """Replace the first document matching query. Returns False if none matched."""
        pass

    @abstractmethod
    def update_many(self, collection: str, query: Dict[str, Any], update: Dict[str, Any]) -> int:
        """Update all documents matching query and return the matched count."""
        pass

    @abstractmethod
    def create_index(self, collection: str, keys: List[Tuple[str, int]], **kwargs) -> None:
        """Create an index."""
        pass

    @abstractmethod
    def count_documents(self, collection: str, query: Dict[str, Any]) -> int:
        """Count documents matching query."""
        pass
