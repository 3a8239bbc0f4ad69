from __future__ import annotations

from pydantic import BaseModel

from common.models.user import User
from common.types.datetime import UtcDateTime

from ...models.feed import CommentView, FeedPost, FeedResult, PostDetail


class AuthorItem(BaseModel):
    user_id: str
    first_name: str
    last_name: str
    display_name: str
    is_placeholder: bool

    @classmethod
    def from_domain(cls, user: User) -> "AuthorItem":
        return cls(
            user_id=user.user_id,
            first_name=user.first_name,
            last_name=user.last_name,
            display_name=user.display_name,
            is_placeholder=user.is_placeholder,
        )


class FeedPostItem(BaseModel):
    post_id: str
    text: str
    created_at: UtcDateTime
    author: AuthorItem
    heart_count: int
    comment_count: int
    viewer_has_hearted: bool
    viewer_has_bookmarked: bool

    @classmethod
    def from_domain(cls, item: FeedPost) -> "FeedPostItem":
        return cls(
            post_id=item.post_id,
            text=item.text,
            created_at=item.created_at,
            author=AuthorItem.from_domain(item.author),
            heart_count=item.heart_count,
            comment_count=item.comment_count,
            viewer_has_hearted=item.viewer_has_hearted,
            viewer_has_bookmarked=item.viewer_has_bookmarked,
        )


class FeedResponse(BaseModel):
    # no_content=True 는 오류가 아닌 "빈 피드" 신호다.
    items: list[FeedPostItem]
    no_content: bool

    @classmethod
    def from_domain(cls, result: FeedResult) -> "FeedResponse":
        return cls(
            items=[FeedPostItem.from_domain(i) for i in result.items],
            no_content=result.no_content,
        )


class CommentItem(BaseModel):
    comment_id: str
    text: str
    created_at: UtcDateTime
    author: AuthorItem

    @classmethod
    def from_domain(cls, comment: CommentView) -> "CommentItem":
        return cls(
            comment_id=comment.comment_id,
            text=comment.text,
            created_at=comment.created_at,
            author=AuthorItem.from_domain(comment.author),
        )


class PostDetailResponse(BaseModel):
    post: FeedPostItem
    comments: list[CommentItem]

    @classmethod
    def from_domain(cls, detail: PostDetail) -> "PostDetailResponse":
        return cls(
            post=FeedPostItem.from_domain(detail.post),
            comments=[CommentItem.from_domain(c) for c in detail.comments],
        )
