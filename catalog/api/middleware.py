"""
API 미들웨어
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from catalog.monitoring import get_logger, global_metrics, request_context

logger = get_logger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    """
    요청 단위 계측

    요청 ID(X-Request-ID, 없으면 생성)를 처리 중 남는 모든 로그에 붙이고,
    응답 헤더에 처리 시간을 기록한다.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        global_metrics.increment("api.requests")

        start_time = time.perf_counter()
        with request_context(request_id):
            try:
                response = await call_next(request)
            except Exception as e:
                elapsed = time.perf_counter() - start_time
                global_metrics.increment("api.errors")
                global_metrics.record("api.latency", elapsed)
                logger.error(f"{request.method} {request.url.path} - {type(e).__name__}: {e} ({elapsed:.3f}s)")
                raise

            elapsed = time.perf_counter() - start_time
            global_metrics.record("api.latency", elapsed)
            if response.status_code >= 400:
                global_metrics.increment("api.errors")

            logger.bind(status_code=response.status_code).info(
                f"{request.method} {request.url.path} {response.status_code} ({elapsed:.3f}s)"
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.6f}"
        return response
