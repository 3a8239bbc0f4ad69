from __future__ import annotations

from typing import Protocol

from common.models.user import User
from ..models.comment import Comment
from ..models.post import Post


class UserRepositoryInterface(Protocol):
    """UserRepository가 따라야 할 최소한의 계약 (읽기 전용).

    Service 레이어는 이 인터페이스에만 의존하고, 구체 구현(Mongo 등)은 몰라도 된다.
    """

    def find_by_id(self, user_id: str) -> User | None:  # pragma: no cover - Protocol
        ...

    def find_many(
        self, user_ids: list[str]
    ) -> dict[str, User]:  # pragma: no cover - Protocol
        """존재하는 유저만 user_id -> User 로 반환한다."""
        ...

    def list_all(
        self, exclude_user_id: str | None = None
    ) -> list[User]:  # pragma: no cover - Protocol
        ...


class PostRepositoryInterface(Protocol):
    """PostRepository가 따라야 할 최소한의 계약.

    목록 조회는 모두 (created_at desc, id desc) 순서로 반환한다.
    """

    def insert(self, post: Post) -> Post:  # pragma: no cover - Protocol
        ...

    def find_by_id(self, post_id: str) -> Post | None:  # pragma: no cover - Protocol
        ...

    def exists(self, post_id: str) -> bool:  # pragma: no cover - Protocol
        ...

    def list_all(self) -> list[Post]:  # pragma: no cover - Protocol
        ...

    def list_by_author(self, author_id: str) -> list[Post]:  # pragma: no cover - Protocol
        ...

    def list_by_authors(
        self, author_ids: list[str]
    ) -> list[Post]:  # pragma: no cover - Protocol
        ...

    def list_by_ids(self, post_ids: list[str]) -> list[Post]:  # pragma: no cover - Protocol
        ...

    def search_text(self, substring: str) -> list[Post]:  # pragma: no cover - Protocol
        """본문에 substring 이 포함된 게시글 (대소문자 무시)."""
        ...

    def find_latest_by_author(
        self, author_id: str
    ) -> Post | None:  # pragma: no cover - Protocol
        ...


class CommentRepositoryInterface(Protocol):
    """CommentRepository가 따라야 할 최소한의 계약.

    list_by_post 는 (created_at asc, id asc) 의 전순서를 보장한다.
    """

    def insert(self, comment: Comment) -> Comment:  # pragma: no cover - Protocol
        ...

    def list_by_post(self, post_id: str) -> list[Comment]:  # pragma: no cover - Protocol
        ...

    def count_by_post(self, post_id: str) -> int:  # pragma: no cover - Protocol
        ...

    def count_by_posts(
        self, post_ids: list[str]
    ) -> dict[str, int]:  # pragma: no cover - Protocol
        """댓글이 없는 post_id 는 결과에서 빠질 수 있다."""
        ...


class MembershipRepositoryInterface(Protocol):
    """하트/북마크 같은 (post_id, user_id) 멤버십 집합의 계약.

    - (post_id, user_id) 조합은 유니크하다.
    - 개수는 항상 현재 멤버십에서 다시 센다. 별도 카운터 필드는 없다.
    """

    def exists(self, post_id: str, user_id: str) -> bool:  # pragma: no cover - Protocol
        ...

    def add(self, post_id: str, user_id: str) -> bool:  # pragma: no cover - Protocol
        """새로 추가됐으면 True, 이미 있었으면 False."""
        ...

    def remove(self, post_id: str, user_id: str) -> bool:  # pragma: no cover - Protocol
        """삭제됐으면 True, 원래 없었으면 False."""
        ...

    def count(self, post_id: str) -> int:  # pragma: no cover - Protocol
        ...

    def count_many(
        self, post_ids: list[str]
    ) -> dict[str, int]:  # pragma: no cover - Protocol
        ...

    def list_post_ids_for_user(
        self, user_id: str, post_ids: list[str]
    ) -> list[str]:  # pragma: no cover - Protocol
        """주어진 post_ids 중 user_id 가 멤버인 것만 반환한다."""
        ...


class FollowRepositoryInterface(Protocol):
    """FollowRepository가 따라야 할 최소한의 계약.

    - (follower_id, followee_id) 방향 간선은 유니크하다.
    """

    def exists(
        self, follower_id: str, followee_id: str
    ) -> bool:  # pragma: no cover - Protocol
        ...

    def insert(
        self, follower_id: str, followee_id: str
    ) -> bool:  # pragma: no cover - Protocol
        ...

    def delete(
        self, follower_id: str, followee_id: str
    ) -> bool:  # pragma: no cover - Protocol
        ...

    def list_followee_ids(self, follower_id: str) -> list[str]:  # pragma: no cover - Protocol
        ...

    def list_follower_ids(self, followee_id: str) -> list[str]:  # pragma: no cover - Protocol
        ...


class HashtagRepositoryInterface(Protocol):
    """HashtagRepository가 따라야 할 최소한의 계약.

    게시글마다 한 번만 쓰이고, 이후에는 수정되지 않는다.
    """

    def insert(self, post_id: str, tags: list[str]) -> None:  # pragma: no cover - Protocol
        ...

    def find_post_ids(self, tags: list[str]) -> list[str]:  # pragma: no cover - Protocol
        """tags 중 하나라도 연관된 post_id 목록 (OR 의미)."""
        ...
