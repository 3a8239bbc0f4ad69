from __future__ import annotations

from fastapi import Depends
from pymongo.database import Database

from common.models.user import User

from ..repositories.database import get_feed_database
from ..repositories.interfaces import UserRepositoryInterface
from ..repositories.user_repository import UserRepository


class IdentityDirectory:
    """user_id -> 프로필 조회. 피드 엔진 안에서는 읽기 전용이다."""

    def __init__(self, user_repo: UserRepositoryInterface) -> None:
        self._user_repo = user_repo

    def resolve(self, user_id: str) -> User | None:
        return self._user_repo.find_by_id(user_id)

    def exists(self, user_id: str) -> bool:
        return self._user_repo.find_by_id(user_id) is not None

    def resolve_or_placeholder(self, user_id: str) -> User:
        """없는 유저여도 실패하지 않고 "Unknown User" 를 돌려준다."""

        return self.resolve(user_id) or User.placeholder(user_id)

    def resolve_many(self, user_ids: list[str]) -> dict[str, User]:
        """요청한 모든 user_id 에 대해 User 를 채워서 반환한다 (없으면 placeholder)."""

        found = self._user_repo.find_many(user_ids)
        return {uid: found.get(uid) or User.placeholder(uid) for uid in user_ids}

    def list_users(self, exclude_user_id: str | None = None) -> list[User]:
        return self._user_repo.list_all(exclude_user_id=exclude_user_id)


def get_user_repository(
    db: Database = Depends(get_feed_database),
) -> UserRepositoryInterface:
    """FastAPI DI용 UserRepository 팩토리."""

    return UserRepository(db)


def get_identity_directory(
    repo: UserRepositoryInterface = Depends(get_user_repository),
) -> IdentityDirectory:
    """FastAPI DI용 IdentityDirectory 팩토리."""

    return IdentityDirectory(repo)
