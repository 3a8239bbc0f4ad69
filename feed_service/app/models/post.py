from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Post(BaseModel):
    """게시글 도메인 모델. 생성 후에는 변경되지 않는다."""

    id: str | None = None
    author_id: str
    text: str
    created_at: datetime


class PostCreation(BaseModel):
    """게시글 생성 결과.

    - tags: 본문에서 추출한 해시태그 (등장 순서, 중복 제거)
    - tags_indexed: 해시태그 인덱싱까지 끝났는지 여부.
      False 이면 게시글은 저장됐지만 아직 태그 검색으로는 찾을 수 없다.
    """

    post: Post
    tags: list[str]
    tags_indexed: bool
