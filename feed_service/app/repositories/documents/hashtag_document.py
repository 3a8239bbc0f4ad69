from __future__ import annotations

from common.mongo.types import BaseDocument


class HashtagDocument(BaseDocument):
    """MongoDB hashtags 컬렉션 도큐먼트 모델.

    게시글 1건의 해시태그 연관을 도큐먼트 1건에 모아 저장한다.
    한 번의 insert 로 쓰이므로 일부 태그만 인덱싱되는 상태가 생기지 않는다.
    """

    post_id: str
    tags: list[str]
