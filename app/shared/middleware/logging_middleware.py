# app/shared/middleware/logging_middleware.py (async version)

"""
Middleware for HTTP request logging.

Every request gets a request id (taken from the X-Request-ID header when the
caller sends one) that is echoed back in the response and attached to the
log records of the request.
"""

import time
import uuid
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from app.adapters.configuration.config import get_settings

# Configure logger
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request logging.
    Logs one line when a request arrives and one when its response leaves.
    Query parameters and the caller address are omitted in production.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        meta = {"request_id": request_id, "method": request.method, "path": request.url.path}
        if get_settings().ENVIRONMENT != "production":
            meta["query"] = dict(request.query_params) or None
            meta["client"] = request.client.host if request.client else None

        logger.info(
            f"Request: {request.method} {request.url.path}",
            extra={"context": "http.request", "meta": meta},
        )

        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            f"Response: {response.status_code} for {request.method} {request.url.path} ({elapsed_ms:.1f}ms)",
            extra={"context": "http.response", "meta": {
                "request_id": request_id,
                "status": response.status_code,
                "elapsed_ms": round(elapsed_ms, 1),
            }},
        )

        return response
