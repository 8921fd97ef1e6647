"""LoggingMiddleware -- 请求访问日志

每个请求一条 request_completed 记录：状态码 + duration_ms。
request_id（ULID）绑定到 structlog contextvars，service 层日志自动携带，
并通过 X-Request-ID 响应头回传给客户端。
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"


def _elapsed_ms(start_time: float) -> int:
    return int((time.monotonic() - start_time) * 1000)


class LoggingMiddleware(BaseHTTPMiddleware):
    """访问日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(ULID())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        log = structlog.get_logger()
        start_time = time.monotonic()
        try:
            response = await call_next(request)
        except Exception:
            await log.aexception("request_failed", duration_ms=_elapsed_ms(start_time))
            raise

        duration_ms = _elapsed_ms(start_time)
        # 5xx 提升为 error，4xx（404/422）属于正常业务结果
        if response.status_code >= 500:
            await log.aerror(
                "request_completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
        else:
            await log.ainfo(
                "request_completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
