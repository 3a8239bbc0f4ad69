import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response


REQUEST_ID_HEADER = "X-Request-Id"
SPAN_ID_HEADER = "X-Span-Id"

# 피드 조회 요청에서 뷰어를 식별하는 쿼리 파라미터
VIEWER_QUERY_PARAM = "viewer_id"

SKIP_PATHS: frozenset[str] = frozenset({"/health"})


class RequestTraceMiddleware(BaseHTTPMiddleware):
    """요청마다 request_id/span_id 를 붙이고 처리 결과를 한 줄로 기록한다.

    - 상위 호출자가 보낸 X-Request-Id / X-Span-Id 가 있으면 그대로 이어받는다.
    - request.state 에 request_id, span_id, viewer_id 를 남겨 핸들러에서도 쓸 수 있게 한다.
    - 요청 바디(게시글/댓글 본문)는 기록하지 않는다.
    """

    def __init__(self, app, logger: logging.Logger | None = None) -> None:  # type: ignore[override]
        super().__init__(app)
        self._logger = logger or logging.getLogger("request_trace")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        state = request.state
        state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        state.span_id = request.headers.get(SPAN_ID_HEADER) or "0"
        state.viewer_id = request.query_params.get(VIEWER_QUERY_PARAM)

        traced = request.url.path not in SKIP_PATHS
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            if traced:
                self._logger.exception(
                    "unhandled error", extra=_trace_fields(request, started)
                )
            raise

        response.headers.setdefault(REQUEST_ID_HEADER, state.request_id)
        response.headers.setdefault(SPAN_ID_HEADER, state.span_id)

        if traced:
            fields = _trace_fields(request, started)
            fields["status"] = response.status_code
            level = logging.WARNING if response.status_code >= 500 else logging.INFO
            self._logger.log(level, "completed request", extra=fields)

        return response


def _trace_fields(request: Request, started: float) -> dict[str, object]:
    fields: dict[str, object] = {
        "request_id": request.state.request_id,
        "span_id": request.state.span_id,
        "method": request.method,
        "path": request.url.path,
        "duration": f"{(time.perf_counter() - started) * 1000:.1f}ms",
    }
    if request.state.viewer_id:
        fields["viewer_id"] = request.state.viewer_id
    if request.query_params:
        fields["query_params"] = dict(request.query_params)
    return fields
