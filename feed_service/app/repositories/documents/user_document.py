from __future__ import annotations

from typing import Optional

from common.models.user import User
from common.mongo.types import BaseDocument, MongoDateTime


class UserDocument(BaseDocument):
    """MongoDB users 컬렉션 도큐먼트 모델.

    가입은 외부 서비스가 처리하므로 created_at 이 없는 도큐먼트도 허용한다.
    """

    user_id: str
    first_name: str = ""
    last_name: str = ""
    created_at: Optional[MongoDateTime] = None  # type: ignore[assignment]

    def to_domain(self) -> User:
        return User(
            user_id=self.user_id,
            first_name=self.first_name,
            last_name=self.last_name,
        )
