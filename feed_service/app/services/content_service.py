from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from fastapi import Depends
from pymongo.database import Database
from pymongo.errors import PyMongoError

from common.types.datetime import utc_now

from ..exceptions import FeedServiceError, NotFoundError, ValidationError
from ..models.comment import Comment
from ..models.post import Post, PostCreation
from ..repositories.comment_repository import CommentRepository
from ..repositories.database import get_feed_database
from ..repositories.interfaces import (
    CommentRepositoryInterface,
    HashtagRepositoryInterface,
    PostRepositoryInterface,
)
from ..repositories.post_repository import PostRepository
from .hashtag_service import HashtagIndex, extract_tags, get_hashtag_repository

logger = logging.getLogger(__name__)


def _require_text(text: str, *, field: str) -> None:
    if not text or not text.strip():
        raise ValidationError(f"{field} must not be empty")


class ContentStore:
    """게시글/댓글 생성 및 조회.

    - 게시글과 댓글은 생성 후 수정/삭제되지 않는다.
    - 생성 시각은 서버가 부여한다.
    - 댓글 수는 저장된 댓글에서 매번 다시 센다.
    """

    def __init__(
        self,
        post_repo: PostRepositoryInterface,
        comment_repo: CommentRepositoryInterface,
        hashtag_index: HashtagIndex,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._post_repo = post_repo
        self._comment_repo = comment_repo
        self._hashtag_index = hashtag_index
        self._clock = clock

    # --- posts -------------------------------------------------------------------
    def create_post(self, author_id: str, text: str) -> PostCreation:
        """게시글을 저장하고, 저장된 본문에서 뽑은 해시태그를 바로 인덱싱한다.

        인덱싱이 실패해도 게시글은 되돌리지 않는다. 대신 tags_indexed=False 로
        "저장됐지만 태그 검색에는 아직 안 잡힘" 상태를 호출자에게 알린다.
        """

        _require_text(text, field="post text")

        post = self._post_repo.insert(
            Post(author_id=author_id, text=text, created_at=self._clock())
        )
        assert post.id is not None
        logger.info("post created: %s by user %s", post.id, author_id)

        tags = extract_tags(post.text)
        try:
            self._hashtag_index.index(post.id, tags)
        except (FeedServiceError, PyMongoError) as exc:
            logger.error(
                "post %s saved but hashtag indexing failed (%d tag(s)): %s",
                post.id,
                len(tags),
                exc,
            )
            return PostCreation(post=post, tags=tags, tags_indexed=False)

        return PostCreation(post=post, tags=tags, tags_indexed=True)

    def get_post(self, post_id: str) -> Post | None:
        return self._post_repo.find_by_id(post_id)

    def list_all_posts(self) -> list[Post]:
        return self._post_repo.list_all()

    def list_posts_by_author(self, author_id: str) -> list[Post]:
        return self._post_repo.list_by_author(author_id)

    def list_posts_by_authors(self, author_ids: list[str]) -> list[Post]:
        return self._post_repo.list_by_authors(author_ids)

    def list_posts_by_ids(self, post_ids: list[str]) -> list[Post]:
        return self._post_repo.list_by_ids(post_ids)

    def search_text(self, substring: str) -> list[Post]:
        """본문 부분 문자열 검색. 해시태그 검색과는 별개의 검색 방식이다.

        질의는 다듬지 않고 그대로 비교한다. 빈 문자열은 모든 게시글에 포함된다.
        """

        return self._post_repo.search_text(substring)

    def latest_post_by_author(self, author_id: str) -> Post | None:
        return self._post_repo.find_latest_by_author(author_id)

    # --- comments ----------------------------------------------------------------
    def add_comment(self, post_id: str, author_id: str, text: str) -> Comment:
        _require_text(text, field="comment text")

        if not self._post_repo.exists(post_id):
            raise NotFoundError("post", post_id)

        comment = self._comment_repo.insert(
            Comment(
                post_id=post_id,
                author_id=author_id,
                text=text,
                created_at=self._clock(),
            )
        )
        logger.info("comment %s added to post %s by %s", comment.id, post_id, author_id)
        return comment

    def list_comments(self, post_id: str) -> list[Comment]:
        return self._comment_repo.list_by_post(post_id)

    def comment_count(self, post_id: str) -> int:
        return self._comment_repo.count_by_post(post_id)

    def comment_counts(self, post_ids: list[str]) -> dict[str, int]:
        counted = self._comment_repo.count_by_posts(post_ids)
        return {pid: counted.get(pid, 0) for pid in post_ids}


def get_post_repository(
    db: Database = Depends(get_feed_database),
) -> PostRepositoryInterface:
    """FastAPI DI용 PostRepository 팩토리."""

    return PostRepository(db)


def get_comment_repository(
    db: Database = Depends(get_feed_database),
) -> CommentRepositoryInterface:
    """FastAPI DI용 CommentRepository 팩토리."""

    return CommentRepository(db)


def get_hashtag_index(
    hashtag_repo: HashtagRepositoryInterface = Depends(get_hashtag_repository),
    post_repo: PostRepositoryInterface = Depends(get_post_repository),
) -> HashtagIndex:
    """FastAPI DI용 HashtagIndex 팩토리.

    해시태그 인덱스는 게시글 생성의 부수 효과로만 쓰이므로 게시글 저장소와 함께 조립한다.
    """

    return HashtagIndex(hashtag_repo=hashtag_repo, post_repo=post_repo)


def get_content_store(
    post_repo: PostRepositoryInterface = Depends(get_post_repository),
    comment_repo: CommentRepositoryInterface = Depends(get_comment_repository),
    hashtag_index: HashtagIndex = Depends(get_hashtag_index),
) -> ContentStore:
    """FastAPI DI용 ContentStore 팩토리."""

    return ContentStore(
        post_repo=post_repo,
        comment_repo=comment_repo,
        hashtag_index=hashtag_index,
    )
