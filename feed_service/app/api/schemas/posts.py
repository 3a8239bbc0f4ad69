from __future__ import annotations

from pydantic import BaseModel

from common.types.datetime import UtcDateTime

from ...models.membership import MembershipChange


class PostCreateRequest(BaseModel):
    author_id: str
    text: str


class PostCreateResponse(BaseModel):
    post_id: str
    author_id: str
    text: str
    created_at: UtcDateTime
    tags: list[str]
    # False 이면 게시글은 저장됐지만 해시태그 검색에는 아직 잡히지 않는다.
    tags_indexed: bool


class CommentCreateRequest(BaseModel):
    author_id: str
    text: str


class CommentCreateResponse(BaseModel):
    comment_id: str
    post_id: str
    author_id: str
    text: str
    created_at: UtcDateTime


class ReactionRequest(BaseModel):
    user_id: str
    present: bool


class ReactionResponse(BaseModel):
    post_id: str
    user_id: str
    result: MembershipChange
    present: bool
    count: int
