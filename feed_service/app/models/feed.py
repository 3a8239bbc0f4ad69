"""피드 조회 결과 모델.

게시글 + 작성자 + 뷰어 기준 관계(하트/북마크) + 집계(하트 수/댓글 수)를
하나로 합친 읽기 전용 뷰들이다.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, computed_field

from common.models.user import User


class FeedPost(BaseModel):
    """enrich 단계를 거친 게시글."""

    post_id: str
    text: str
    created_at: datetime
    author: User
    heart_count: int
    comment_count: int
    viewer_has_hearted: bool
    viewer_has_bookmarked: bool


class FeedResult(BaseModel):
    """피드/검색 결과.

    결과가 0건이면 no_content 가 True 가 된다. 오류가 아니라 "빈 화면" 신호다.
    """

    items: list[FeedPost]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def no_content(self) -> bool:
        return not self.items


class CommentView(BaseModel):
    """작성자만 붙인 댓글. 댓글에는 하트/북마크 상태가 없다."""

    comment_id: str
    post_id: str
    text: str
    created_at: datetime
    author: User


class PostDetail(BaseModel):
    post: FeedPost
    comments: list[CommentView]


class FollowableUser(BaseModel):
    """팔로우 후보 목록의 한 줄.

    last_active_at 이 None 이면 아직 게시글을 한 번도 쓰지 않은 유저다.
    """

    user: User
    is_followed: bool
    last_active_at: datetime | None = None
