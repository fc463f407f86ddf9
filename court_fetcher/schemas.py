"""Wire models for case records and API envelopes"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CaseStatus(str, Enum):
    ACTIVE = "Active"
    DISPOSED = "Disposed"


class CaseQuery(CamelModel):
    """Validated case identifiers submitted from the form"""
    case_type: str
    case_number: str
    filing_year: int


class Parties(CamelModel):
    petitioner: str
    respondent: str


class OrderEntry(CamelModel):
    """One simulated docket event"""
    date: str  # DD/MM/YYYY
    description: str
    pdf_url: Optional[str] = None


class CaseRecord(CamelModel):
    """Synthetic case metadata returned to the client"""
    id: str
    case_number: str
    case_type: str
    filing_year: str
    parties: Parties
    filing_date: str
    next_hearing_date: str
    status: CaseStatus
    orders: List[OrderEntry] = []
    last_updated: str
    source: str
    scraped_at: str


class FetchCaseResponse(CamelModel):
    success: bool = True
    data: CaseRecord
    query_id: str
    message: str
