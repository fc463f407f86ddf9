"""Utility modules for logging"""
from court_fetcher.utils.logger import get_logger, setup_logging
from court_fetcher.utils.fetch_logger import log_fetch_execution

__all__ = [
    "get_logger",
    "setup_logging",
    "log_fetch_execution",
]
