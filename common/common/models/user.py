from __future__ import annotations

from pydantic import BaseModel, Field


UNKNOWN_FIRST_NAME = "Unknown"
UNKNOWN_LAST_NAME = "User"


class User(BaseModel):
    """유저 도메인 모델.

    - Mongo users 컬렉션과 1:1로 매핑되는 공용 모델이다.
    - 가입/프로필 수정은 외부 서비스가 담당하며, 피드 엔진에서는 읽기 전용이다.
    - is_placeholder 가 True 이면 저장소에 없는 user_id 를 대신하는 "Unknown User" 이다.
    """

    user_id: str
    first_name: str
    last_name: str
    is_placeholder: bool = Field(default=False)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def placeholder(cls, user_id: str) -> "User":
        """삭제되었거나 존재하지 않는 작성자를 표시하기 위한 대체 유저."""

        return cls(
            user_id=user_id,
            first_name=UNKNOWN_FIRST_NAME,
            last_name=UNKNOWN_LAST_NAME,
            is_placeholder=True,
        )
