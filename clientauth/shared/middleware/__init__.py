# clientauth/shared/middleware/__init__.py

from clientauth.shared.middleware.exception_middleware import AsyncExceptionMiddleware
from clientauth.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware

# Export all for easy imports
__all__ = [
    "AsyncExceptionMiddleware",
    "AsyncRequestLoggingMiddleware",
]
