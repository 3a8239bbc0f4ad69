from __future__ import annotations

from common.mongo.types import BaseDocument, from_object_id
from ...models.comment import Comment


class CommentDocument(BaseDocument):
    """MongoDB comments 컬렉션 도큐먼트 모델."""

    post_id: str
    author_id: str
    text: str

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentDocument":
        return cls.model_validate(
            {
                "post_id": comment.post_id,
                "author_id": comment.author_id,
                "text": comment.text,
                "created_at": comment.created_at,
            }
        )

    def to_domain(self) -> Comment:
        return Comment(
            id=from_object_id(self.id),
            post_id=self.post_id,
            author_id=self.author_id,
            text=self.text,
            created_at=self.created_at,
        )
