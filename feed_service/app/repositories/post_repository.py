from __future__ import annotations

import re

from pymongo import DESCENDING
from pymongo.database import Database

from common.mongo.types import try_object_id

from ..exceptions import translate_storage_errors
from ..models.post import Post
from .documents.post_document import PostDocument
from .interfaces import PostRepositoryInterface


# 최신 글 우선, 같은 시각이면 _id 역순
NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]


class PostRepository(PostRepositoryInterface):
    """posts 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["posts"]

    @staticmethod
    def _from_document(doc: dict) -> Post:
        return PostDocument.model_validate(doc).to_domain()

    def _find(self, filter_doc: dict) -> list[Post]:
        cursor = self._col.find(filter_doc, sort=NEWEST_FIRST)
        return [self._from_document(doc) for doc in cursor]

    # --- commands ----------------------------------------------------------------
    @translate_storage_errors
    def insert(self, post: Post) -> Post:
        payload = PostDocument.from_domain(post).to_mongo_record()
        result = self._col.insert_one(payload)
        payload["_id"] = result.inserted_id
        return self._from_document(payload)

    # --- queries -----------------------------------------------------------------
    @translate_storage_errors
    def find_by_id(self, post_id: str) -> Post | None:
        oid = try_object_id(post_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        if not doc:
            return None
        return self._from_document(doc)

    @translate_storage_errors
    def exists(self, post_id: str) -> bool:
        oid = try_object_id(post_id)
        if oid is None:
            return False
        return self._col.find_one({"_id": oid}, {"_id": 1}) is not None

    @translate_storage_errors
    def list_all(self) -> list[Post]:
        return self._find({})

    @translate_storage_errors
    def list_by_author(self, author_id: str) -> list[Post]:
        return self._find({"author_id": author_id})

    @translate_storage_errors
    def list_by_authors(self, author_ids: list[str]) -> list[Post]:
        """팔로잉 피드용. 작성자 필터와 정렬을 한 번의 쿼리로 처리한다."""

        if not author_ids:
            return []
        return self._find({"author_id": {"$in": author_ids}})

    @translate_storage_errors
    def list_by_ids(self, post_ids: list[str]) -> list[Post]:
        oids = [oid for oid in (try_object_id(v) for v in post_ids) if oid is not None]
        if not oids:
            return []
        return self._find({"_id": {"$in": oids}})

    @translate_storage_errors
    def search_text(self, substring: str) -> list[Post]:
        pattern = re.escape(substring)
        return self._find({"text": {"$regex": pattern, "$options": "i"}})

    @translate_storage_errors
    def find_latest_by_author(self, author_id: str) -> Post | None:
        doc = self._col.find_one({"author_id": author_id}, sort=NEWEST_FIRST)
        if not doc:
            return None
        return self._from_document(doc)
