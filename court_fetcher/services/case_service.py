"""Case service - simulated court case lookup

No court website is contacted. Case records are synthesized from fixed
literal pools: parties are keyed off the case number, everything else is
drawn from a ``random.Random`` that callers may seed.
"""
import asyncio
import random
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, List, Optional, Tuple

from court_fetcher.config.settings import settings
from court_fetcher.exceptions import CourtFetchError, InvalidRequestError
from court_fetcher.schemas import CaseQuery, CaseRecord, CaseStatus, OrderEntry, Parties
from court_fetcher.utils.fetch_logger import log_fetch_execution
from court_fetcher.utils.logger import get_logger

logger = get_logger(__name__)

# Case type -> Delhi High Court case number prefix
CASE_TYPE_PREFIXES = {
    "writ": "W.P.(C)",
    "civil": "C.S.",
    "criminal": "Crl.",
    "appeal": "C.A.",
    "revision": "C.R.",
    "misc": "Misc.",
}

CASE_TYPE_LABELS = {
    "writ": "Writ Petition (Civil)",
    "civil": "Civil Suit",
    "criminal": "Criminal Case",
    "appeal": "Civil Appeal",
    "revision": "Civil Revision",
    "misc": "Miscellaneous Application",
}

# (value, label) pairs for the search form select
CASE_TYPE_OPTIONS: List[Tuple[str, str]] = [
    ("writ", "Writ Petition (W.P.)"),
    ("civil", "Civil Suit (C.S.)"),
    ("criminal", "Criminal Case (Crl.)"),
    ("appeal", "Civil Appeal (C.A.)"),
    ("revision", "Civil Revision (C.R.)"),
    ("misc", "Miscellaneous (Misc.)"),
]

PETITIONERS = [
    "M/s ABC Corporation Ltd.",
    "Shri Ram Kumar",
    "Citizens Welfare Association",
    "Delhi Residents Forum",
    "M/s Tech Solutions Pvt. Ltd.",
    "Smt. Priya Sharma",
    "Delhi Transport Corporation",
    "M/s Global Industries Ltd.",
]

RESPONDENTS = [
    "Union of India & Ors.",
    "State of Delhi & Anr.",
    "Delhi Development Authority",
    "Municipal Corporation of Delhi",
    "Delhi Police & Ors.",
    "M/s XYZ Industries Ltd.",
    "Delhi Metro Rail Corporation",
    "Government of NCT of Delhi",
]

ORDER_TEMPLATES = [
    "Notice issued to respondents. Reply to be filed within 4 weeks.",
    "Counter affidavit filed by respondents. Rejoinder to be filed within 2 weeks.",
    "Arguments heard. Judgment reserved.",
    "Interim application disposed of. Main matter for hearing.",
    "Evidence recorded. Final arguments on next date.",
    "Petition filed. Defects pointed out.",
    "Case adjourned due to non-appearance of counsel.",
    "Status report called from respondents.",
    "Compliance affidavit filed. Matter for final disposal.",
    "Interim relief granted. Notice issued.",
]

DATE_FORMAT = "%d/%m/%Y"
MAX_ORDERS = 4
NEXT_HEARING_WINDOW_DAYS = 90
ACTIVE_PROBABILITY = 0.8
ORDER_PDF_PROBABILITY = 0.7

MISSING_FIELDS_MESSAGE = "Missing required fields: caseType, caseNumber, filingYear"
_DIGITS = re.compile(r"[0-9]+")


# --- Validation ---

def validate_case_query(payload: Any, current_year: Optional[int] = None) -> CaseQuery:
    """
    Validate a fetch-case request body.

    Args:
        payload: Decoded JSON body with caseType, caseNumber, filingYear
        current_year: Upper bound for the filing year (defaults to this year)

    Returns:
        Validated CaseQuery

    Raises:
        InvalidRequestError: On missing fields, a non-numeric case number or
            a filing year outside the accepted range
    """
    if not isinstance(payload, dict):
        raise InvalidRequestError(MISSING_FIELDS_MESSAGE)

    case_type = payload.get("caseType")
    case_number = payload.get("caseNumber")
    filing_year = payload.get("filingYear")

    if not case_type or not case_number or not filing_year:
        raise InvalidRequestError(MISSING_FIELDS_MESSAGE)

    case_number = str(case_number)
    if isinstance(payload.get("caseNumber"), bool) or not _DIGITS.fullmatch(case_number):
        raise InvalidRequestError("Case number must contain only digits")

    current_year = current_year or date.today().year
    year_error = f"Filing year must be between {settings.min_filing_year} and {current_year}"
    try:
        year = int(str(filing_year).strip())
    except ValueError:
        raise InvalidRequestError(year_error) from None
    if year < settings.min_filing_year or year > current_year:
        raise InvalidRequestError(year_error)

    return CaseQuery(case_type=str(case_type), case_number=case_number, filing_year=year)


# --- Formatting helpers ---

def format_case_number(case_type: str, case_number: str, filing_year) -> str:
    """Build the court-style number, e.g. ``W.P.(C) 12345/2024``"""
    prefix = CASE_TYPE_PREFIXES.get(case_type, case_type.upper())
    return f"{prefix} {case_number}/{filing_year}"


def get_case_type_label(case_type: str) -> str:
    return CASE_TYPE_LABELS.get(case_type, case_type.upper())


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_local_timestamp(value: datetime) -> str:
    """Render like an en-IN locale string: ``19/10/2026, 4:05:09 pm``"""
    hour = value.strftime("%I").lstrip("0")
    meridiem = "am" if value.hour < 12 else "pm"
    return f"{value.strftime(DATE_FORMAT)}, {hour}:{value.strftime('%M:%S')} {meridiem}"


# --- Mock data generators ---

def _random_date_between(start: date, end: date, rng: random.Random) -> date:
    if end <= start:
        return start
    return start + timedelta(days=rng.randint(0, (end - start).days))


def generate_parties(case_number: str) -> Parties:
    """Pick the party pair deterministically from the case number"""
    # Pools have 8 entries and 8 divides 1000: the last three digits fix n % 8
    number = int(case_number[-3:])
    return Parties(
        petitioner=PETITIONERS[number % len(PETITIONERS)],
        respondent=RESPONDENTS[(number + 1) % len(RESPONDENTS)],
    )


def generate_filing_date(filing_year: int, rng: random.Random, today: date) -> date:
    filing_date = date(filing_year, rng.randint(1, 12), rng.randint(1, 28))
    if filing_date > today:
        # Filed this year: keep it in the past
        filing_date = _random_date_between(date(filing_year, 1, 1), today, rng)
    return filing_date


def generate_next_hearing_date(rng: random.Random, today: date) -> date:
    return today + timedelta(days=rng.randint(1, NEXT_HEARING_WINDOW_DAYS))


def generate_orders(
    case_type: str,
    case_number: str,
    filing_year: int,
    filing_date: date,
    rng: random.Random,
    today: date,
) -> List[OrderEntry]:
    """
    Generate 1-4 order entries dated between filing and today, newest first.

    Roughly 70% of orders carry a document link on the court site.
    """
    dated_orders = []
    for _ in range(rng.randint(1, MAX_ORDERS)):
        order_date = _random_date_between(filing_date, today, rng)
        description = rng.choice(ORDER_TEMPLATES)
        pdf_url = None
        if rng.random() < ORDER_PDF_PROBABILITY:
            pdf_url = (
                f"{settings.court_base_url}/orders/"
                f"{case_type}_{case_number}_{filing_year}_{order_date.strftime('%d%m%Y')}.pdf"
            )
        dated_orders.append(
            (order_date, OrderEntry(date=format_date(order_date), description=description, pdf_url=pdf_url))
        )

    dated_orders.sort(key=lambda item: item[0], reverse=True)
    return [order for _, order in dated_orders]


def build_case_record(
    query: CaseQuery,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> CaseRecord:
    """Assemble a fresh synthetic case record for the query"""
    rng = rng or random.Random()
    now = now or datetime.now()
    today = now.date()

    filing_date = generate_filing_date(query.filing_year, rng, today)
    status = CaseStatus.ACTIVE if rng.random() < ACTIVE_PROBABILITY else CaseStatus.DISPOSED

    return CaseRecord(
        id=f"case_{int(now.timestamp() * 1000)}",
        case_number=format_case_number(query.case_type, query.case_number, query.filing_year),
        case_type=get_case_type_label(query.case_type),
        filing_year=str(query.filing_year),
        parties=generate_parties(query.case_number),
        filing_date=format_date(filing_date),
        next_hearing_date=format_date(generate_next_hearing_date(rng, today)),
        status=status,
        orders=generate_orders(
            query.case_type, query.case_number, query.filing_year, filing_date, rng, today
        ),
        last_updated=format_local_timestamp(now),
        source=settings.court_name,
        scraped_at=now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )


# --- Simulated court lookup ---

async def _simulate_latency(rng: random.Random):
    low, high = settings.simulated_latency_min, settings.simulated_latency_max
    if high <= 0:
        return
    await asyncio.sleep(rng.uniform(max(low, 0.0), high))


@log_fetch_execution("court")
async def fetch_case(query: CaseQuery, rng: Optional[random.Random] = None) -> CaseRecord:
    """
    Look up a case on the court website (simulated)

    Args:
        query: Validated case identifiers
        rng: Random source, seeded by tests for reproducible records

    Returns:
        Synthetic CaseRecord

    Raises:
        CourtFetchError: If the lookup fails, including the configured
            error-test case numbers
    """
    rng = rng or random.Random()
    formatted_number = format_case_number(query.case_type, query.case_number, query.filing_year)
    logger.info(
        f"Scraping {settings.court_name} for: {query.case_type} {query.case_number}/{query.filing_year}"
    )

    try:
        logger.info(f"Attempting to fetch case: {formatted_number}", case_number=formatted_number)
        await _simulate_latency(rng)

        if query.case_number in settings.error_test_case_numbers:
            raise LookupError(f"No record found for {formatted_number}")

        return build_case_record(query, rng=rng)
    except Exception as e:
        raise CourtFetchError(
            f"Failed to fetch case data from court website: {e}",
            court_name=settings.court_name,
        ) from e
