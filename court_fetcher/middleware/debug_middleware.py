"""Debug middleware for FastAPI request/response logging"""
import time
import json
from typing import Callable
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from court_fetcher.config.settings import settings
from court_fetcher.utils.logger import get_logger

logger = get_logger(__name__)


class DebugLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and responses in debug mode"""

    async def dispatch(self, request: Request, call_next: Callable):
        # Skip logging for static files
        if request.url.path.startswith("/static"):
            return await call_next(request)

        request_id = id(request)

        if settings.debug:
            logger.debug(
                f"Incoming request: {request.method} {request.url.path}",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                query_params=dict(request.query_params)
            )

            # Log JSON bodies of POST requests (form submissions, downloads)
            if request.method == "POST":
                body = await request.body()
                if body:
                    try:
                        payload = json.loads(body)
                    except ValueError:
                        logger.debug(f"Request body is not JSON ({len(body)} bytes)", request_id=request_id)
                    else:
                        logger.debug(
                            f"Request body: {json.dumps(payload, ensure_ascii=False)}",
                            request_id=request_id
                        )

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"Request failed: {str(e)}",
                request_id=request_id,
                duration_ms=round(duration * 1000, 2),
                exc_info=True
            )
            raise

        duration = time.time() - start_time
        if settings.debug:
            logger.debug(
                f"Response: {response.status_code}",
                request_id=request_id,
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2)
            )

        return response
