# app/shared/middleware/__init__.py (async version)

"""
HTTP middlewares: domain exception mapping and request logging.

Order matters when registering them in app.main: the logging middleware is
added last so it wraps the exception one and also logs error responses.
"""

from app.shared.middleware.exception_middleware import AsyncExceptionMiddleware
from app.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware

__all__ = [
    "AsyncExceptionMiddleware",
    "AsyncRequestLoggingMiddleware",
]
