from __future__ import annotations

import logging
import threading
from typing import Optional

from pymongo import ASCENDING, DESCENDING, IndexModel, MongoClient
from pymongo.database import Database
from pymongo.errors import ConfigurationError, PyMongoError

from .config import get_mongo_db_name, get_mongo_timeout_ms, get_mongo_uri


logger = logging.getLogger(__name__)


_client: Optional[MongoClient] = None
_db: Optional[Database] = None
_lock = threading.Lock()


def _open_client() -> MongoClient:
    timeout_ms = get_mongo_timeout_ms()
    client: MongoClient = MongoClient(
        get_mongo_uri(),
        tz_aware=True,
        timeoutMS=timeout_ms,
        serverSelectionTimeoutMS=timeout_ms,
    )
    try:
        client.admin.command("ping")
    except PyMongoError:
        # 연결 실패는 드라이버 예외 그대로 올려 호출 측에서 일시 장애로 분류하게 한다.
        client.close()
        raise
    return client


def _select_database(client: MongoClient) -> Database:
    """MONGO_DB_NAME 이 있으면 그 DB, 없으면 URI 에 적힌 기본 DB."""

    db_name = get_mongo_db_name()
    if db_name:
        return client[db_name]
    try:
        return client.get_default_database()
    except ConfigurationError as exc:
        raise RuntimeError(
            "MongoDB database name must be specified via MONGO_DB_NAME or in MONGO_URI (mongodb://.../db_name)",
        ) from exc


def get_client() -> MongoClient:
    """프로세스 전역 MongoClient 를 반환한다. 첫 호출에서만 연결한다.

    - 연산마다 MONGO_TIMEOUT_MS 이상 기다리지 않는다.
    - 연결 직후 ensure_indexes 로 유니크 인덱스를 보장한다.
      인덱스를 만들 수 없으면 토글 멱등성을 지킬 수 없으므로 기동을 중단한다.
    - 설정 누락은 RuntimeError, 연결/타임아웃은 PyMongoError 로 끝난다.
    """

    global _client, _db

    if _client is not None:
        return _client

    with _lock:
        if _client is not None:
            return _client

        client = _open_client()
        try:
            db = _select_database(client)
            ensure_indexes(db)
        except Exception:
            client.close()
            raise

        _client, _db = client, db
        logger.info("MongoDB connected and indexes ensured (db=%s)", db.name)
        return client


def get_database() -> Database:
    """전역 기본 Database 객체를 반환한다 (FastAPI DI 에서도 사용)."""

    if _db is None:
        get_client()
    assert _db is not None
    return _db


def close_client() -> None:
    """프로세스 종료 시 커넥션 풀을 정리한다."""

    global _client, _db

    with _lock:
        if _client is not None:
            _client.close()
        _client = None
        _db = None


def ensure_indexes(db: Database) -> None:
    """필수 인덱스를 생성한다.

    중복 생성해도 MongoDB 가 처리하므로 idempotent 하다.
    hearts/bookmarks/follows 의 유니크 인덱스가 멤버십 중복을 막는 유일한 근거다.
    """

    db["users"].create_indexes(
        [IndexModel([("user_id", ASCENDING)], name="uniq_user_id", unique=True)]
    )

    db["posts"].create_indexes(
        [
            IndexModel(
                [("created_at", DESCENDING), ("_id", DESCENDING)],
                name="idx_created_at_id_desc",
            ),
            IndexModel(
                [("author_id", ASCENDING), ("created_at", DESCENDING)],
                name="idx_author_created_at",
            ),
        ]
    )

    db["comments"].create_indexes(
        [
            IndexModel(
                [("post_id", ASCENDING), ("created_at", ASCENDING), ("_id", ASCENDING)],
                name="idx_post_created_at_id",
            )
        ]
    )

    for name in ("hearts", "bookmarks"):
        db[name].create_indexes(
            [
                IndexModel(
                    [("post_id", ASCENDING), ("user_id", ASCENDING)],
                    name="uniq_post_user",
                    unique=True,
                ),
                IndexModel([("user_id", ASCENDING)], name="idx_user"),
            ]
        )

    db["follows"].create_indexes(
        [
            IndexModel(
                [("follower_id", ASCENDING), ("followee_id", ASCENDING)],
                name="uniq_follower_followee",
                unique=True,
            ),
            IndexModel([("followee_id", ASCENDING)], name="idx_followee"),
        ]
    )

    db["hashtags"].create_indexes(
        [
            IndexModel([("post_id", ASCENDING)], name="uniq_post_id", unique=True),
            IndexModel([("tags", ASCENDING)], name="idx_tags"),
        ]
    )
