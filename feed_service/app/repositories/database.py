from __future__ import annotations

from pymongo.database import Database

from common.mongo.client import get_database

from ..exceptions import translate_storage_errors


@translate_storage_errors
def get_feed_database() -> Database:
    """FastAPI DI용 Database 팩토리.

    첫 연결(또는 재연결) 중 저장소에 닿지 못하면 TransientStorageError 로 끝난다.
    """

    return get_database()
