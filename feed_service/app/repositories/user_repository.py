from __future__ import annotations

from pymongo import ASCENDING
from pymongo.database import Database

from common.models.user import User

from ..exceptions import translate_storage_errors
from .documents.user_document import UserDocument
from .interfaces import UserRepositoryInterface


class UserRepository(UserRepositoryInterface):
    """users 컬렉션에 대한 MongoDB 접근 레이어 (읽기 전용)."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["users"]

    @staticmethod
    def _from_document(doc: dict) -> User:
        return UserDocument.model_validate(doc).to_domain()

    @translate_storage_errors
    def find_by_id(self, user_id: str) -> User | None:
        doc = self._col.find_one({"user_id": user_id})
        if not doc:
            return None
        return self._from_document(doc)

    @translate_storage_errors
    def find_many(self, user_ids: list[str]) -> dict[str, User]:
        if not user_ids:
            return {}

        cursor = self._col.find({"user_id": {"$in": list(set(user_ids))}})
        users: dict[str, User] = {}
        for doc in cursor:
            user = self._from_document(doc)
            users[user.user_id] = user
        return users

    @translate_storage_errors
    def list_all(self, exclude_user_id: str | None = None) -> list[User]:
        filter_doc: dict = {}
        if exclude_user_id is not None:
            filter_doc["user_id"] = {"$ne": exclude_user_id}

        cursor = self._col.find(
            filter_doc,
            sort=[("last_name", ASCENDING), ("first_name", ASCENDING), ("user_id", ASCENDING)],
        )
        return [self._from_document(doc) for doc in cursor]
