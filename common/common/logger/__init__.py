import json
import logging
import os
import sys
from datetime import datetime, timezone


DEFAULT_SERVICE_NAME = "social-feed"

# 요청 추적 미들웨어가 extra 로 넘기는 필드. JSON 로그에 최상위 키로 옮긴다.
TRACE_FIELDS = (
    "request_id",
    "span_id",
    "viewer_id",
    "method",
    "path",
    "query_params",
    "status",
    "duration",
)

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"

# 이 이름으로 붙인 핸들러만 교체한다. 테스트 러너 등 외부에서 붙인 핸들러는 건드리지 않는다.
_HANDLER_NAME = "social-feed-stdout"


def _resolve_level(level: str | None) -> int:
    raw = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(raw)
    if isinstance(resolved, int):
        return resolved
    return logging.INFO


def _build_formatter() -> logging.Formatter:
    if os.getenv("LOG_FORMAT", "json").strip().lower() == "text":
        return logging.Formatter(TEXT_FORMAT)
    return JsonFormatter(service_name=os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME))


def setup_logger(name: str = DEFAULT_SERVICE_NAME, level: str | None = None) -> logging.Logger:
    """프로세스 로그 출력을 stdout 하나로 모으고 서비스 로거를 반환한다.

    Args:
        name: 서비스 로거 이름. SERVICE_NAME 환경변수가 있으면 그 값을 쓴다.
        level: 로그 레벨. 없으면 LOG_LEVEL 환경변수, 그것도 없으면 INFO.

    각 모듈은 logging.getLogger(__name__) 로 로거를 얻고, 출력은 루트 로거의
    핸들러 하나가 담당한다. LOG_FORMAT=text 이면 사람이 읽는 한 줄 포맷을 쓴다.
    여러 번 호출해도 핸들러가 중복으로 붙지 않는다.
    """

    log_level = _resolve_level(level)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(_build_formatter())
    root.addHandler(handler)
    root.setLevel(log_level)

    # pymongo 는 DEBUG 에서 커맨드 단위 로그를 남기므로 한 단계 올려 둔다.
    logging.getLogger("pymongo").setLevel(max(log_level, logging.INFO))

    return logging.getLogger(os.getenv("SERVICE_NAME", name))


class JsonFormatter(logging.Formatter):
    """한 줄에 JSON 객체 하나를 쓰는 포맷터.

    timestamp 는 UTC ISO8601 이며, 예외가 있으면 exc_info 에 traceback 문자열을 담는다.
    """

    def __init__(self, service_name: str | None = None) -> None:
        super().__init__()
        self._service_name = service_name

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self._service_name:
            payload["service"] = self._service_name

        payload.update(
            {key: getattr(record, key) for key in TRACE_FIELDS if hasattr(record, key)}
        )

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)
