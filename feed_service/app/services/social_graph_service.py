from __future__ import annotations

import logging
from datetime import datetime

from fastapi import Depends
from pymongo.database import Database

from ..config import AppConfig, get_config
from ..exceptions import NotFoundError, ValidationError
from ..models.feed import FollowableUser
from ..models.membership import MembershipChange
from ..repositories.database import get_feed_database
from ..repositories.follow_repository import FollowRepository
from ..repositories.interfaces import (
    FollowRepositoryInterface,
    PostRepositoryInterface,
)
from .content_service import get_post_repository
from .identity_service import IdentityDirectory, get_identity_directory

logger = logging.getLogger(__name__)


class SocialGraph:
    """follower -> followee 방향 그래프.

    - 같은 방향 간선은 하나만 존재한다 (follow 는 멱등).
    - 순환은 허용된다. 자기 자신 팔로우는 설정(allow_self_follow)으로 제어한다.
    """

    def __init__(
        self,
        follow_repo: FollowRepositoryInterface,
        post_repo: PostRepositoryInterface,
        identity: IdentityDirectory,
        allow_self_follow: bool = True,
    ) -> None:
        self._follow_repo = follow_repo
        self._post_repo = post_repo
        self._identity = identity
        self._allow_self_follow = allow_self_follow

    def is_following(self, follower_id: str, followee_id: str) -> bool:
        return self._follow_repo.exists(follower_id, followee_id)

    def follow(self, follower_id: str, followee_id: str) -> MembershipChange:
        if follower_id == followee_id and not self._allow_self_follow:
            raise ValidationError("cannot follow yourself")
        if not self._identity.exists(followee_id):
            raise NotFoundError("user", followee_id)

        if self._follow_repo.insert(follower_id, followee_id):
            logger.info("%s followed %s", follower_id, followee_id)
            return MembershipChange.ADDED
        return MembershipChange.ALREADY_PRESENT

    def unfollow(self, follower_id: str, followee_id: str) -> MembershipChange:
        """간선이 없을 때는 NOT_PRESENT 를 돌려줄 뿐 에러가 아니다."""

        if self._follow_repo.delete(follower_id, followee_id):
            logger.info("%s unfollowed %s", follower_id, followee_id)
            return MembershipChange.REMOVED
        return MembershipChange.NOT_PRESENT

    def set_follow(
        self, follower_id: str, followee_id: str, following: bool
    ) -> MembershipChange:
        if following:
            return self.follow(follower_id, followee_id)
        return self.unfollow(follower_id, followee_id)

    def followees_of(self, user_id: str) -> set[str]:
        return set(self._follow_repo.list_followee_ids(user_id))

    def followers_of(self, user_id: str) -> set[str]:
        return set(self._follow_repo.list_follower_ids(user_id))

    def last_active_at(self, user_id: str) -> datetime | None:
        """가장 최근 게시글의 작성 시각. 글을 쓴 적이 없으면 None."""

        latest = self._post_repo.find_latest_by_author(user_id)
        if latest is None:
            return None
        return latest.created_at

    def list_followable_users(self, viewer_id: str) -> list[FollowableUser]:
        """뷰어를 제외한 모든 유저와, 뷰어가 팔로우 중인지/마지막 활동 시각."""

        followees = self.followees_of(viewer_id)
        return [
            FollowableUser(
                user=user,
                is_followed=user.user_id in followees,
                last_active_at=self.last_active_at(user.user_id),
            )
            for user in self._identity.list_users(exclude_user_id=viewer_id)
        ]


def get_follow_repository(
    db: Database = Depends(get_feed_database),
) -> FollowRepositoryInterface:
    """FastAPI DI용 FollowRepository 팩토리."""

    return FollowRepository(db)


def get_social_graph(
    follow_repo: FollowRepositoryInterface = Depends(get_follow_repository),
    post_repo: PostRepositoryInterface = Depends(get_post_repository),
    identity: IdentityDirectory = Depends(get_identity_directory),
    config: AppConfig = Depends(get_config),
) -> SocialGraph:
    """FastAPI DI용 SocialGraph 팩토리."""

    return SocialGraph(
        follow_repo=follow_repo,
        post_repo=post_repo,
        identity=identity,
        allow_self_follow=config.social.allow_self_follow,
    )
