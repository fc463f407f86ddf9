"""Database models module"""
from court_fetcher.database.models.query_log import CaseQueryLog
from court_fetcher.database.models.response_log import CaseResponseLog

__all__ = ["CaseQueryLog", "CaseResponseLog"]
