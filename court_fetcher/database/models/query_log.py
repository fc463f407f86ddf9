"""CaseQueryLog model - one row per submitted case search"""
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime

from court_fetcher.database.connection import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CaseQueryLog(Base):
    """Audit row for an incoming fetch-case request"""
    __tablename__ = "case_queries"

    id = Column(String(64), primary_key=True, comment="Query ID (query_<millis>_<suffix>)")
    case_type = Column(String(50), nullable=False, comment="Case type key (writ, civil, ...)")
    case_number = Column(String(50), nullable=False, index=True, comment="Case number digits")
    filing_year = Column(String(10), nullable=False, comment="Filing year")
    query_timestamp = Column(DateTime(timezone=True), default=_utcnow, comment="Received at")
    ip_address = Column(String(255), comment="Client IP from x-forwarded-for")

    def __repr__(self):
        return f"<CaseQueryLog {self.case_type}/{self.case_number}/{self.filing_year}>"
