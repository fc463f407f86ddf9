"""
Audit Service - best-effort logging of case queries and responses

Responsibilities:
1. Store each validated query and the record returned for it
2. Store failures so that errors are visible in the database
3. Never let a database problem reach the client: every write is wrapped,
   logged and swallowed
"""
import asyncio
import random
import string
import time
from typing import Callable, Optional

from sqlalchemy.orm import Session

from court_fetcher.database.models import CaseQueryLog, CaseResponseLog
from court_fetcher.schemas import CaseQuery, CaseRecord
from court_fetcher.utils.logger import get_logger

logger = get_logger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_query_id(prefix: str = "query", rng: Optional[random.Random] = None) -> str:
    """``<prefix>_<epoch millis>_<9 base36 chars>``"""
    rng = rng or random.Random()
    suffix = "".join(rng.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


class AuditRecorder:
    """Synchronous writer bound to one DB session"""

    def __init__(self, db: Session):
        self.db = db

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.db.close()

    def _commit(self, row):
        try:
            self.db.add(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return row

    def save_query(self, query_id: str, query: CaseQuery, ip_address: str) -> CaseQueryLog:
        return self._commit(CaseQueryLog(
            id=query_id,
            case_type=query.case_type,
            case_number=query.case_number,
            filing_year=str(query.filing_year),
            ip_address=ip_address,
        ))

    def save_response(self, query_id: str, record: CaseRecord) -> CaseResponseLog:
        return self._commit(CaseResponseLog(
            query_id=query_id,
            case_data=record.to_json_dict(),
            success=True,
        ))

    def save_failure(self, query_id: str, error_message: str) -> CaseResponseLog:
        return self._commit(CaseResponseLog(
            query_id=query_id,
            case_data={},
            success=False,
            error_message=error_message,
        ))


class AuditService:
    """
    Async facade over AuditRecorder.

    With no session factory the service is disabled and every call is a
    no-op. Blocking DB work runs in a worker thread.
    """

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        self.session_factory = session_factory

    @property
    def enabled(self) -> bool:
        return self.session_factory is not None

    async def _run(self, action: str, write: Callable[[AuditRecorder], object]) -> bool:
        if not self.enabled:
            return False

        def _write():
            with AuditRecorder(self.session_factory()) as recorder:
                write(recorder)

        try:
            await asyncio.to_thread(_write)
            return True
        except Exception as e:
            logger.error(f"Database {action} error: {e}")
            return False

    async def record_query(self, query_id: str, query: CaseQuery, ip_address: str) -> bool:
        return await self._run(
            "logging", lambda r: r.save_query(query_id, query, ip_address)
        )

    async def record_response(self, query_id: str, record: CaseRecord) -> bool:
        return await self._run(
            "storage", lambda r: r.save_response(query_id, record)
        )

    async def record_failure(self, error_message: str) -> bool:
        query_id = generate_query_id("error")
        return await self._run(
            "error logging", lambda r: r.save_failure(query_id, error_message)
        )
