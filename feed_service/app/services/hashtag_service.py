"""해시태그 추출/인덱싱/검색.

태그는 "#" 으로 시작하는 공백 없는 토큰 전체이며, "#" 을 포함한 그대로 저장한다.
대소문자를 구분하므로 "#Python" 과 "#python" 은 서로 다른 인덱스 키다.
"""

from __future__ import annotations

import logging
from typing import Iterable

from fastapi import Depends
from pymongo.database import Database

from ..exceptions import FailedPreconditionError
from ..repositories.database import get_feed_database
from ..repositories.hashtag_repository import HashtagRepository
from ..repositories.interfaces import (
    HashtagRepositoryInterface,
    PostRepositoryInterface,
)

logger = logging.getLogger(__name__)

HASHTAG_MARKER = "#"


def _unique(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


def extract_tags(text: str) -> list[str]:
    """본문에서 해시태그를 등장 순서대로 중복 없이 추출한다.

    "#" 으로 시작하는 토큰이면 "#" 하나뿐이어도 태그다.
    """

    return _unique(token for token in text.split() if token.startswith(HASHTAG_MARKER))


def parse_tag_query(query: str | Iterable[str]) -> list[str]:
    """검색어를 공백 기준으로 나눠 태그 목록으로 만든다. 리스트를 받으면 그대로 정리만 한다."""

    if isinstance(query, str):
        parts: Iterable[str] = query.split()
    else:
        parts = (token for item in query for token in item.split())
    return _unique(parts)


class HashtagIndex:
    """게시글 생성 시 한 번 쓰이는 tag -> post 인덱스."""

    def __init__(
        self,
        hashtag_repo: HashtagRepositoryInterface,
        post_repo: PostRepositoryInterface,
    ) -> None:
        self._hashtag_repo = hashtag_repo
        self._post_repo = post_repo

    def index(self, post_id: str, tags: list[str]) -> None:
        """post_id 에 tags 를 연결한다.

        게시글이 없으면 아무것도 쓰지 않고 FailedPreconditionError 를 발생시킨다.
        태그 전체가 한 번에 저장되므로 일부만 인덱싱되는 경우는 없다.
        """

        if not self._post_repo.exists(post_id):
            raise FailedPreconditionError(f"cannot index hashtags, post not found: {post_id}")
        if not tags:
            return

        self._hashtag_repo.insert(post_id, list(tags))
        logger.info("indexed %d hashtag(s) for post %s", len(tags), post_id)

    def search(self, tags_query: str | Iterable[str]) -> list[str]:
        """질의한 태그 중 하나라도 가진 게시글 id (합집합)."""

        tags = parse_tag_query(tags_query)
        if not tags:
            return []
        return _unique(self._hashtag_repo.find_post_ids(tags))


def get_hashtag_repository(
    db: Database = Depends(get_feed_database),
) -> HashtagRepositoryInterface:
    """FastAPI DI용 HashtagRepository 팩토리."""

    return HashtagRepository(db)
