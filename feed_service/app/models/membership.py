from __future__ import annotations

from enum import Enum


class MembershipChange(str, Enum):
    """토글형 쓰기(하트/북마크/팔로우)의 결과.

    ALREADY_PRESENT / NOT_PRESENT 는 실패가 아니라 "상태 변화 없음"을 뜻한다.
    """

    ADDED = "added"
    ALREADY_PRESENT = "already_present"
    REMOVED = "removed"
    NOT_PRESENT = "not_present"

    @property
    def changed(self) -> bool:
        return self in (MembershipChange.ADDED, MembershipChange.REMOVED)
