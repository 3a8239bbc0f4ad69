from __future__ import annotations

import logging

from fastapi import Depends
from pymongo.database import Database

from ..exceptions import NotFoundError
from ..models.membership import MembershipChange
from ..models.post import Post
from ..repositories.database import get_feed_database
from ..repositories.interfaces import (
    MembershipRepositoryInterface,
    PostRepositoryInterface,
)
from ..repositories.membership_repository import (
    BOOKMARKS_COLLECTION,
    HEARTS_COLLECTION,
    MembershipRepository,
)
from .content_service import get_post_repository

logger = logging.getLogger(__name__)


class ReactionLedger:
    """토글형 멤버십 집합 (하트, 북마크).

    - Repository(MembershipRepositoryInterface)에만 의존하고, Mongo 세부 구현은 알지 않는다.
    - 하트와 북마크는 같은 클래스를 서로 다른 저장소로 생성해 사용한다.
    - count 는 항상 멤버십 개수를 다시 센 값이다.
    """

    def __init__(
        self,
        repo: MembershipRepositoryInterface,
        post_repo: PostRepositoryInterface,
        kind: str,
    ) -> None:
        self._repo = repo
        self._post_repo = post_repo
        self.kind = kind

    def has(self, post_id: str, user_id: str) -> bool:
        return self._repo.exists(post_id, user_id)

    def add(self, post_id: str, user_id: str) -> MembershipChange:
        """멤버십을 추가한다. 이미 있으면 ALREADY_PRESENT (에러 아님)."""

        if not self._post_repo.exists(post_id):
            raise NotFoundError("post", post_id)

        if self._repo.add(post_id, user_id):
            logger.info("%s added: post=%s user=%s", self.kind, post_id, user_id)
            return MembershipChange.ADDED
        return MembershipChange.ALREADY_PRESENT

    def remove(self, post_id: str, user_id: str) -> MembershipChange:
        """멤버십을 삭제한다. 원래 없었으면 NOT_PRESENT (에러 아님)."""

        if self._repo.remove(post_id, user_id):
            logger.info("%s removed: post=%s user=%s", self.kind, post_id, user_id)
            return MembershipChange.REMOVED
        return MembershipChange.NOT_PRESENT

    def set(self, post_id: str, user_id: str, present: bool) -> MembershipChange:
        """present=True 는 add, False 는 remove. 호출자 입장에서 멱등이다."""

        if present:
            return self.add(post_id, user_id)
        return self.remove(post_id, user_id)

    def count(self, post_id: str) -> int:
        return self._repo.count(post_id)

    def count_many(self, post_ids: list[str]) -> dict[str, int]:
        counted = self._repo.count_many(post_ids)
        return {pid: counted.get(pid, 0) for pid in post_ids}

    def members_among(self, user_id: str, post_ids: list[str]) -> set[str]:
        """post_ids 중 user_id 가 멤버인 게시글 id 집합."""

        return set(self._repo.list_post_ids_for_user(user_id, post_ids))

    def subset_for_user(self, posts: list[Post], user_id: str) -> list[Post]:
        """posts 중 user_id 가 멤버인 것만 원래 순서대로 남긴다 (예: 내 북마크)."""

        ids = [p.id for p in posts if p.id is not None]
        members = self.members_among(user_id, ids)
        return [p for p in posts if p.id in members]


def get_heart_repository(
    db: Database = Depends(get_feed_database),
) -> MembershipRepositoryInterface:
    """FastAPI DI용 hearts MembershipRepository 팩토리."""

    return MembershipRepository(db, HEARTS_COLLECTION)


def get_bookmark_repository(
    db: Database = Depends(get_feed_database),
) -> MembershipRepositoryInterface:
    """FastAPI DI용 bookmarks MembershipRepository 팩토리."""

    return MembershipRepository(db, BOOKMARKS_COLLECTION)


def get_heart_ledger(
    repo: MembershipRepositoryInterface = Depends(get_heart_repository),
    post_repo: PostRepositoryInterface = Depends(get_post_repository),
) -> ReactionLedger:
    return ReactionLedger(repo, post_repo, kind="heart")


def get_bookmark_ledger(
    repo: MembershipRepositoryInterface = Depends(get_bookmark_repository),
    post_repo: PostRepositoryInterface = Depends(get_post_repository),
) -> ReactionLedger:
    return ReactionLedger(repo, post_repo, kind="bookmark")
