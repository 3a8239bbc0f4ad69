from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Comment(BaseModel):
    """댓글 도메인 모델.

    한 게시글 안에서는 (created_at, id) 오름차순으로 정렬된다.
    """

    id: str | None = None
    post_id: str
    author_id: str
    text: str
    created_at: datetime
