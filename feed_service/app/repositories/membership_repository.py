from __future__ import annotations

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from common.types.datetime import utc_now

from ..exceptions import translate_storage_errors
from .documents.membership_document import MembershipDocument
from .interfaces import MembershipRepositoryInterface


HEARTS_COLLECTION = "hearts"
BOOKMARKS_COLLECTION = "bookmarks"


class MembershipRepository(MembershipRepositoryInterface):
    """(post_id, user_id) 멤버십 컬렉션에 대한 MongoDB 접근 레이어.

    hearts 와 bookmarks 는 같은 구현을 서로 다른 컬렉션으로 사용한다.
    """

    def __init__(self, database: Database, collection_name: str) -> None:
        self._db = database
        self._col = database[collection_name]

    @translate_storage_errors
    def exists(self, post_id: str, user_id: str) -> bool:
        found = self._col.find_one({"post_id": post_id, "user_id": user_id}, {"_id": 1})
        return found is not None

    @translate_storage_errors
    def add(self, post_id: str, user_id: str) -> bool:
        doc = MembershipDocument(post_id=post_id, user_id=user_id, created_at=utc_now())
        try:
            result = self._col.update_one(
                {"post_id": post_id, "user_id": user_id},
                {"$setOnInsert": doc.to_mongo_record()},
                upsert=True,
            )
        except DuplicateKeyError:
            # 동시에 들어온 같은 upsert 중 하나만 삽입되고 나머지는 유니크 인덱스에 걸린다.
            return False
        return result.upserted_id is not None

    @translate_storage_errors
    def remove(self, post_id: str, user_id: str) -> bool:
        result = self._col.delete_one({"post_id": post_id, "user_id": user_id})
        return result.deleted_count > 0

    @translate_storage_errors
    def count(self, post_id: str) -> int:
        return self._col.count_documents({"post_id": post_id})

    @translate_storage_errors
    def count_many(self, post_ids: list[str]) -> dict[str, int]:
        if not post_ids:
            return {}

        pipeline = [
            {"$match": {"post_id": {"$in": post_ids}}},
            {"$group": {"_id": "$post_id", "count": {"$sum": 1}}},
        ]
        return {str(row["_id"]): int(row["count"]) for row in self._col.aggregate(pipeline)}

    @translate_storage_errors
    def list_post_ids_for_user(self, user_id: str, post_ids: list[str]) -> list[str]:
        if not post_ids:
            return []

        cursor = self._col.find(
            {"user_id": user_id, "post_id": {"$in": post_ids}},
            {"post_id": 1},
        )
        ids: list[str] = []
        for raw in cursor:
            value = raw.get("post_id")
            if value is not None:
                ids.append(str(value))
        return ids
