from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_validators import AfterValidator, BeforeValidator
from typing_extensions import Annotated


def ensure_utc_datetime(value: datetime) -> datetime:
    """datetime 값을 UTC 기준으로 정규화한다.

    - tzinfo 가 없으면 UTC 로 간주해 tzinfo=UTC 를 부여
    - tzinfo 가 있으면 UTC 로 변환
    """

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def truncate_to_millis(value: datetime) -> datetime:
    """BSON datetime 은 밀리초 단위이므로 저장 전에 같은 정밀도로 맞춘다.

    insert 가 돌려주는 값과 이후 조회한 값이 같아야 한다.
    """

    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def to_object_id(value: Any) -> ObjectId:
    """여러 타입(str, ObjectId 등)을 MongoDB ObjectId 로 변환한다."""

    if isinstance(value, ObjectId):
        return value
    if value is None:
        raise TypeError("ObjectId cannot be None")
    return ObjectId(str(value))


def try_object_id(value: Any) -> Optional[ObjectId]:
    """ObjectId 로 해석할 수 없는 값이면 None 을 반환한다.

    외부에서 받은 식별자는 형식이 틀려도 "존재하지 않음"으로 다뤄야 하므로
    InvalidId 예외 대신 None 을 돌려준다.
    """

    if isinstance(value, ObjectId):
        return value
    if value is None or not ObjectId.is_valid(str(value)):
        return None
    return ObjectId(str(value))


def from_object_id(value: Optional[ObjectId]) -> Optional[str]:
    if value is None:
        return None
    return str(value)


PyObjectId = Annotated[ObjectId, BeforeValidator(to_object_id)]
MongoDateTime = Annotated[
    datetime,
    BeforeValidator(ensure_utc_datetime),
    AfterValidator(truncate_to_millis),
]


class BaseDocument(BaseModel):
    """MongoDB 도큐먼트용 공통 베이스 모델.

    - 피드 엔진의 레코드는 생성 후 변경되지 않으므로 created_at 만 공통 필드로 둔다.
    - ObjectId 같은 임의 타입을 허용하고 alias 기반 직렬화(by_alias)를 사용한다.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    created_at: MongoDateTime

    def to_mongo_record(self) -> dict[str, Any]:
        """MongoDB 저장에 사용할 표준 레코드(dict) 직렬화.

        - by_alias=True 로 id -> _id 등의 Mongo 필드 이름과 일치시킨다.
        - exclude_none=True 로 _id=None 같은 필드를 제거해 Mongo가 ObjectId 를 생성하도록 한다.
        """

        return self.model_dump(by_alias=True, exclude_none=True)
