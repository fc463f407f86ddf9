"""Logging helpers for simulated court fetches"""
from functools import wraps
import time

from court_fetcher.config.settings import settings
from court_fetcher.utils.logger import get_logger


def log_fetch_execution(source: str):
    """Decorator for logging a court fetch with timing

    Args:
        source: Label of the upstream source (e.g. "delhi_high_court")

    Usage:
        @log_fetch_execution("delhi_high_court")
        async def fetch_case(query):
            ...
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__)
            start_time = time.time()

            if settings.debug_fetch_execution:
                logger.debug(f"Fetch started: {source}.{func.__name__}")

            try:
                result = await func(*args, **kwargs)
            except Exception:
                duration = time.time() - start_time
                logger.error(
                    f"Fetch failed: {source}.{func.__name__}",
                    duration_ms=round(duration * 1000, 2),
                    exc_info=True
                )
                raise

            if settings.debug_fetch_execution:
                duration = time.time() - start_time
                logger.info(
                    f"Fetch complete: {source}.{func.__name__}",
                    duration_ms=round(duration * 1000, 2)
                )

            return result

        return wrapper
    return decorator
