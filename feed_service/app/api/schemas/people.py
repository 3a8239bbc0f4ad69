from __future__ import annotations

from pydantic import BaseModel

from common.models.user import User
from common.types.datetime import OptionalUtcDateTime

from ...models.feed import FollowableUser
from ...models.membership import MembershipChange


class UserProfileResponse(BaseModel):
    user_id: str
    first_name: str
    last_name: str
    display_name: str
    # null 이면 아직 게시글을 쓴 적이 없다.
    last_active_at: OptionalUtcDateTime = None

    @classmethod
    def from_domain(cls, user: User, last_active_at=None) -> "UserProfileResponse":
        return cls(
            user_id=user.user_id,
            first_name=user.first_name,
            last_name=user.last_name,
            display_name=user.display_name,
            last_active_at=last_active_at,
        )


class FollowableUserItem(BaseModel):
    user_id: str
    display_name: str
    is_followed: bool
    last_active_at: OptionalUtcDateTime = None

    @classmethod
    def from_domain(cls, item: FollowableUser) -> "FollowableUserItem":
        return cls(
            user_id=item.user.user_id,
            display_name=item.user.display_name,
            is_followed=item.is_followed,
            last_active_at=item.last_active_at,
        )


class ListFollowableUsersResponse(BaseModel):
    items: list[FollowableUserItem]


class FollowRequest(BaseModel):
    follower_id: str
    following: bool


class FollowResponse(BaseModel):
    follower_id: str
    followee_id: str
    result: MembershipChange
    following: bool


class UserIdsResponse(BaseModel):
    user_id: str
    user_ids: list[str]
