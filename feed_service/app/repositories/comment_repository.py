from __future__ import annotations

from pymongo import ASCENDING
from pymongo.database import Database

from ..exceptions import translate_storage_errors
from ..models.comment import Comment
from .documents.comment_document import CommentDocument
from .interfaces import CommentRepositoryInterface


# 동시에 쓰인 댓글도 결정적인 순서를 갖도록 _id 로 동률을 깬다.
OLDEST_FIRST = [("created_at", ASCENDING), ("_id", ASCENDING)]


class CommentRepository(CommentRepositoryInterface):
    """comments 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["comments"]

    @translate_storage_errors
    def insert(self, comment: Comment) -> Comment:
        payload = CommentDocument.from_domain(comment).to_mongo_record()
        result = self._col.insert_one(payload)
        payload["_id"] = result.inserted_id
        return CommentDocument.model_validate(payload).to_domain()

    @translate_storage_errors
    def list_by_post(self, post_id: str) -> list[Comment]:
        cursor = self._col.find({"post_id": post_id}, sort=OLDEST_FIRST)
        return [CommentDocument.model_validate(doc).to_domain() for doc in cursor]

    @translate_storage_errors
    def count_by_post(self, post_id: str) -> int:
        return self._col.count_documents({"post_id": post_id})

    @translate_storage_errors
    def count_by_posts(self, post_ids: list[str]) -> dict[str, int]:
        """여러 게시글의 댓글 수를 한 번에 집계한다 (N+1 방지)."""

        if not post_ids:
            return {}

        pipeline = [
            {"$match": {"post_id": {"$in": post_ids}}},
            {"$group": {"_id": "$post_id", "count": {"$sum": 1}}},
        ]
        return {str(row["_id"]): int(row["count"]) for row in self._col.aggregate(pipeline)}
