"""CaseResponseLog model - audit of what was returned for a query"""
from sqlalchemy import Boolean, Column, Integer, String, Text, DateTime

from court_fetcher.database.connection import Base
from court_fetcher.database.models.query_log import _utcnow
from court_fetcher.database.models.types import UnicodeJSON


class CaseResponseLog(Base):
    """Audit row for a fetch-case outcome"""
    __tablename__ = "case_responses"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # No FK: failure rows carry an error_ id without a matching query row
    query_id = Column(String(64), index=True, nullable=False, comment="Related query ID")

    case_data = Column(UnicodeJSON, comment="Case record as returned to the client")
    response_timestamp = Column(DateTime(timezone=True), default=_utcnow, comment="Responded at")
    success = Column(Boolean, nullable=False, default=True)
    error_message = Column(Text, comment="Failure reason")
