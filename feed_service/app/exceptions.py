from __future__ import annotations

import functools
import logging
from typing import Callable, ParamSpec, TypeVar

from pymongo.errors import ConnectionFailure, ExecutionTimeout, PyMongoError, WTimeoutError


logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


class FeedServiceError(Exception):
    """Base exception for all feed-service errors."""

    retryable = False


class ValidationError(FeedServiceError):
    """Caller input violates a precondition (e.g., empty post body)."""


class NotFoundError(FeedServiceError):
    """A referenced entity does not exist."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class FailedPreconditionError(FeedServiceError):
    """A dependent write was attempted against a missing primary entity."""


class TransientStorageError(FeedServiceError):
    """Storage unreachable or timed out. Safe for the caller to retry reads."""

    retryable = True

    def __init__(self, message: str = "storage temporarily unavailable") -> None:
        super().__init__(message)


def _is_transient(exc: PyMongoError) -> bool:
    if isinstance(exc, (ConnectionFailure, ExecutionTimeout, WTimeoutError)):
        return True
    # timeoutMS(CSOT) 초과는 여러 예외 타입으로 올라오지만 모두 timeout 속성이 True 다.
    return bool(getattr(exc, "timeout", False))


def translate_storage_errors(func: Callable[P, R]) -> Callable[P, R]:
    """레포지토리 메서드의 드라이버 연결/타임아웃 예외를 TransientStorageError 로 바꾼다.

    - 재시도는 하지 않는다. 재시도 정책은 호출자 몫이다.
    - 그 외 PyMongoError 는 그대로 전파한다.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except PyMongoError as exc:
            if not _is_transient(exc):
                raise
            logger.warning("storage operation %s failed: %s", func.__qualname__, exc)
            raise TransientStorageError() from exc

    return wrapper
