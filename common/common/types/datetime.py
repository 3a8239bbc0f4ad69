from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic.functional_serializers import PlainSerializer


def utc_now() -> datetime:
    """현재 시각(UTC, tz-aware). 서버가 부여하는 생성 시각의 기준."""
    return datetime.now(timezone.utc)


def serialize_datetime_to_utc_iso8601(value: datetime) -> str:
    """모든 datetime을 UTC 기준 ISO8601(+타임존) 문자열로 직렬화한다."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat()


def _serialize_optional(value: Optional[datetime]) -> Optional[str]:
    # 마지막 활동 시각처럼 "아직 없음"이 정상 상태인 필드용
    if value is None:
        return None
    return serialize_datetime_to_utc_iso8601(value)


UtcDateTime = Annotated[
    datetime,
    PlainSerializer(
        serialize_datetime_to_utc_iso8601,
        return_type=str,
        when_used="json",
    ),
]

OptionalUtcDateTime = Annotated[
    Optional[datetime],
    PlainSerializer(
        _serialize_optional,
        return_type=Optional[str],
        when_used="json",
    ),
]
