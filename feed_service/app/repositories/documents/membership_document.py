from __future__ import annotations

from common.mongo.types import BaseDocument


class MembershipDocument(BaseDocument):
    """hearts / bookmarks 컬렉션 공용 도큐먼트.

    (post_id, user_id) 쌍의 존재 자체가 상태의 전부이며, 유니크 인덱스로 중복을 막는다.
    """

    post_id: str
    user_id: str


class FollowDocument(BaseDocument):
    """MongoDB follows 컬렉션 도큐먼트 모델 (follower -> followee 방향 간선)."""

    follower_id: str
    followee_id: str
