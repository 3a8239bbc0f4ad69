from __future__ import annotations

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from common.types.datetime import utc_now

from ..exceptions import translate_storage_errors
from .documents.membership_document import FollowDocument
from .interfaces import FollowRepositoryInterface


class FollowRepository(FollowRepositoryInterface):
    """follows 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["follows"]

    @translate_storage_errors
    def exists(self, follower_id: str, followee_id: str) -> bool:
        found = self._col.find_one(
            {"follower_id": follower_id, "followee_id": followee_id}, {"_id": 1}
        )
        return found is not None

    @translate_storage_errors
    def insert(self, follower_id: str, followee_id: str) -> bool:
        doc = FollowDocument(
            follower_id=follower_id, followee_id=followee_id, created_at=utc_now()
        )
        try:
            result = self._col.update_one(
                {"follower_id": follower_id, "followee_id": followee_id},
                {"$setOnInsert": doc.to_mongo_record()},
                upsert=True,
            )
        except DuplicateKeyError:
            return False
        return result.upserted_id is not None

    @translate_storage_errors
    def delete(self, follower_id: str, followee_id: str) -> bool:
        result = self._col.delete_one(
            {"follower_id": follower_id, "followee_id": followee_id}
        )
        return result.deleted_count > 0

    @translate_storage_errors
    def list_followee_ids(self, follower_id: str) -> list[str]:
        cursor = self._col.find({"follower_id": follower_id}, {"followee_id": 1})
        return [str(raw["followee_id"]) for raw in cursor]

    @translate_storage_errors
    def list_follower_ids(self, followee_id: str) -> list[str]:
        cursor = self._col.find({"followee_id": followee_id}, {"follower_id": 1})
        return [str(raw["follower_id"]) for raw in cursor]
