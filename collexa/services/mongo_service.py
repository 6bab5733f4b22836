"""
MongoDB Service - shared helpers and a generic CRUD base for document collections.

Public content (companies, blogs, courses, contact messages) is plain
create/list/get/update/delete; the specialised services subclass
CollectionService and add their own rules on top.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from collexa.core.errors import DuplicateConflict, NotFound


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    return serialize_value(doc)


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse an id; malformed ids return None so callers answer 404."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def to_mongo(data: Dict[str, Any]) -> Dict[str, Any]:
    """Normalise values for BSON: plain dates become datetimes, enums their values."""
    out = {}
    for key, value in data.items():
        if isinstance(value, date) and not isinstance(value, datetime):
            value = datetime(value.year, value.month, value.day)
        elif isinstance(value, Enum):
            value = value.value
        out[key] = value
    return out


class CollectionService:
    """
    Generic CRUD over one collection.

    Subclasses set `collection_name`, `not_found_message` and optionally
    `duplicate_message` / `duplicate_error` (used when a unique index rejects
    a write).
    """

    collection_name: str = ""
    not_found_message: str = "Not found"
    duplicate_message: str = "Duplicate record"
    duplicate_error = DuplicateConflict

    def __init__(self, db: Database):
        self.db = db
        self.collection: Collection = db[self.collection_name]

    def _not_found(self) -> NotFound:
        return NotFound(self.not_found_message)

    def find_one_or_404(self, doc_id: Any) -> dict:
        oid = to_object_id(doc_id)
        doc = self.collection.find_one({"_id": oid}) if oid else None
        if not doc:
            raise self._not_found()
        return doc

    def create(self, data: Dict[str, Any]) -> dict:
        now = datetime.utcnow()
        doc = {**to_mongo(data), "created_at": now, "updated_at": now}
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise self.duplicate_error(self.duplicate_message)
        doc["_id"] = result.inserted_id
        return doc

    def list(self, query: Optional[dict] = None, sort=None) -> List[dict]:
        cursor = self.collection.find(query or {})
        cursor = cursor.sort(sort or [("created_at", DESCENDING)])
        return list(cursor)

    def get(self, doc_id: Any) -> dict:
        return self.find_one_or_404(doc_id)

    def update(self, doc_id: Any, changes: Dict[str, Any]) -> dict:
        oid = to_object_id(doc_id)
        if oid is None:
            raise self._not_found()
        changes = {**to_mongo(changes), "updated_at": datetime.utcnow()}
        try:
            doc = self.collection.find_one_and_update(
                {"_id": oid}, {"$set": changes}, return_document=ReturnDocument.AFTER
            )
        except DuplicateKeyError:
            raise self.duplicate_error(self.duplicate_message)
        if not doc:
            raise self._not_found()
        return doc

    def delete(self, doc_id: Any) -> None:
        oid = to_object_id(doc_id)
        result = self.collection.delete_one({"_id": oid}) if oid else None
        if result is None or result.deleted_count == 0:
            raise self._not_found()
