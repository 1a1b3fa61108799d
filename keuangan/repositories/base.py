from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.database import Database
from pymongo.errors import PyMongoError

from keuangan.errors import StoreError
from keuangan.logging_setup import get_logger

logger = get_logger(__name__)


class MongoRepository:
    def __init__(self, db: Database, collection_name: str):
        self.collection = db[collection_name]

    @staticmethod
    def _object_id(id_str: str) -> Optional[ObjectId]:
        try:
            return ObjectId(id_str)
        except (InvalidId, TypeError):
            return None

    @staticmethod
    def _stringify(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        # Convert ObjectId ke string untuk JSON
        if doc and "_id" in doc:
            doc["_id"] = str(doc["_id"])
        return doc

    def insert_one(self, data: Dict[str, Any]) -> str:
        """Insert satu dokumen dan return ID"""
        try:
            result = self.collection.insert_one(data)
        except PyMongoError as e:
            logger.exception("insert into %s failed", self.collection.name)
            raise StoreError(str(e)) from e
        return str(result.inserted_id)

    def find_by_id(self, id_str: str) -> Optional[Dict[str, Any]]:
        """Find dokumen berdasarkan ID"""
        obj_id = self._object_id(id_str)
        if obj_id is None:
            return None
        try:
            doc = self.collection.find_one({"_id": obj_id})
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return self._stringify(doc)

    def find_many(self, query: Dict[str, Any], limit: int = 0, sort: Optional[List] = None) -> List[Dict[str, Any]]:
        """Find banyak dokumen; limit=0 means no limit"""
        try:
            cursor = self.collection.find(query)
            if sort:
                cursor = cursor.sort(sort)
            if limit:
                cursor = cursor.limit(limit)
            docs = list(cursor)
        except PyMongoError as e:
            logger.exception("query on %s failed", self.collection.name)
            raise StoreError(str(e)) from e
        return [self._stringify(doc) for doc in docs]

    def delete_by_id(self, id_str: str) -> bool:
        """Delete dokumen berdasarkan ID"""
        obj_id = self._object_id(id_str)
        if obj_id is None:
            return False
        try:
            result = self.collection.delete_one({"_id": obj_id})
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return result.deleted_count > 0

    def count(self, query: Dict[str, Any] = None) -> int:
        """Count dokumen"""
        if query is None:
            query = {}
        try:
            return self.collection.count_documents(query)
        except PyMongoError as e:
            raise StoreError(str(e)) from e
