# 📄 File: chatter/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Writes one diary line when a request arrives and one when it finishes, with how long it took,
# and tags every log line in between with the same request number.
# 🧪 Purpose (Technical Summary):
# Request logging middleware: request-id correlation via contextvars (log_context), timing,
# slow-request warnings and X-Request-ID propagation. Cookie and authorization headers are never logged.
# 🔗 Dependencies:
# Starlette BaseHTTPMiddleware, chatter.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# chatter.main (middleware registration)

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from chatter.shared.utils.logging import log_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
EXCLUDED_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware for API monitoring.
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER.lower()) or str(uuid.uuid4())
        request.state.request_id = request_id

        with log_context(request_id=request_id):
            if request.url.path in EXCLUDED_PATHS:
                response = await call_next(request)
                response.headers[REQUEST_ID_HEADER] = request_id
                return response

            start_time = time.perf_counter()
            logger.info(
                f"Request started: {request.method} {request.url.path}",
                extra={"extra_fields": {
                    "method": request.method,
                    "path": request.url.path,
                    "client_ip": request.client.host if request.client else None,
                }},
            )

            try:
                response = await call_next(request)
            except Exception as e:
                processing_time = time.perf_counter() - start_time
                logger.error(
                    f"Request failed: {request.method} {request.url.path} - {type(e).__name__}: {e}",
                    extra={"extra_fields": {"processing_time": round(processing_time, 4)}},
                )
                raise

            processing_time = time.perf_counter() - start_time
            level = logging.WARNING if processing_time > self.slow_request_threshold else logging.INFO
            logger.log(
                level,
                f"Request completed: {request.method} {request.url.path} - {response.status_code} ({processing_time:.3f}s)",
                extra={"extra_fields": {
                    "status_code": response.status_code,
                    "processing_time": round(processing_time, 4),
                }},
            )

            response.headers[REQUEST_ID_HEADER] = request_id
            return response
