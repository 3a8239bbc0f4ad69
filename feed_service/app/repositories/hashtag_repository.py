from __future__ import annotations

from pymongo.database import Database

from common.types.datetime import utc_now

from ..exceptions import translate_storage_errors
from .documents.hashtag_document import HashtagDocument
from .interfaces import HashtagRepositoryInterface


class HashtagRepository(HashtagRepositoryInterface):
    """hashtags 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["hashtags"]

    @translate_storage_errors
    def insert(self, post_id: str, tags: list[str]) -> None:
        doc = HashtagDocument(post_id=post_id, tags=tags, created_at=utc_now())
        self._col.insert_one(doc.to_mongo_record())

    @translate_storage_errors
    def find_post_ids(self, tags: list[str]) -> list[str]:
        if not tags:
            return []

        cursor = self._col.find({"tags": {"$in": tags}}, {"post_id": 1})
        return [str(raw["post_id"]) for raw in cursor]
