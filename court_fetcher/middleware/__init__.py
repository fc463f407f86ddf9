"""Middleware modules for request/response processing"""
from court_fetcher.middleware.debug_middleware import DebugLoggingMiddleware

__all__ = [
    "DebugLoggingMiddleware",
]
