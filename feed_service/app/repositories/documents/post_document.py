from __future__ import annotations

from common.mongo.types import BaseDocument, from_object_id
from ...models.post import Post


class PostDocument(BaseDocument):
    """MongoDB posts 컬렉션 도큐먼트 모델."""

    author_id: str
    text: str

    @classmethod
    def from_domain(cls, post: Post) -> "PostDocument":
        return cls.model_validate(
            {
                "author_id": post.author_id,
                "text": post.text,
                "created_at": post.created_at,
            }
        )

    def to_domain(self) -> Post:
        return Post(
            id=from_object_id(self.id),
            author_id=self.author_id,
            text=self.text,
            created_at=self.created_at,
        )
