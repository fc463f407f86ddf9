"""FastAPI application entry point"""
from contextlib import asynccontextmanager
from datetime import date
from pathlib import Path
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError

from court_fetcher.config.settings import settings
from court_fetcher.database.connection import Base, SessionLocal, engine
from court_fetcher.exceptions import CourtFetcherError, CourtFetchError, DocumentDownloadError, InvalidRequestError
from court_fetcher.middleware.debug_middleware import DebugLoggingMiddleware
from court_fetcher.schemas import FetchCaseResponse
from court_fetcher.services.audit_service import AuditService, generate_query_id
from court_fetcher.services.case_service import CASE_TYPE_OPTIONS, fetch_case, validate_case_query
from court_fetcher.services.document_service import DOWNLOAD_FILENAME, PDF_MEDIA_TYPE, get_order_document
from court_fetcher.utils.logger import setup_logging, get_logger

# Setup centralized logging
setup_logging()
logger = get_logger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent.parent

# Shared audit writer; disabled when no database is configured
audit_service = AuditService(SessionLocal if settings.audit_enabled else None)


def get_audit_service() -> AuditService:
    """Dependency to get the audit service"""
    return audit_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info(f"Starting {settings.app_name} (audit={'on' if audit_service.enabled else 'off'})")
    if engine is not None and settings.auto_create_tables:
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("Audit tables ensured")
        except SQLAlchemyError as e:
            # Auditing is best-effort; serve requests without it
            logger.error(f"Could not create audit tables: {e}")

    yield

    if engine is not None:
        engine.dispose()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Court Data Fetcher API",
    description="Case status lookup for Delhi High Court (simulated)",
    version="0.1.0",
    lifespan=lifespan
)

# Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.debug:
    app.add_middleware(DebugLoggingMiddleware)

# Static & Templates
app.mount("/static", StaticFiles(directory=PACKAGE_DIR / "static"), name="static")
templates = Jinja2Templates(directory=PACKAGE_DIR / "templates")


# --- Error handlers ---

@app.exception_handler(CourtFetcherError)
async def fetcher_error_handler(request: Request, exc: CourtFetcherError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Last resort: JSON under /api, an error page elsewhere"""
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    if request.url.path.startswith("/api/"):
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Internal server error", "details": str(exc)},
        )
    return templates.TemplateResponse(
        request, "error.html", {"app_name": settings.app_name}, status_code=500
    )


async def _read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as e:
        logger.error(f"JSON parse error: {e}")
        raise InvalidRequestError("Invalid JSON in request body") from None


def _client_ip(request: Request) -> str:
    return request.headers.get("x-forwarded-for") or "unknown"


# --- Routes ---

@app.get("/")
async def root(request: Request):
    """Serve the case search page"""
    current_year = date.today().year
    return templates.TemplateResponse(request, "index.html", {
        "app_name": settings.app_name,
        "court_name": settings.court_name,
        "case_types": CASE_TYPE_OPTIONS,
        "current_year": current_year,
        "min_year": settings.min_filing_year,
        "error_test_numbers": settings.error_test_case_numbers,
    })


@app.get("/health")
async def health_check():
    return {"status": "healthy", "audit": audit_service.enabled}


@app.post("/api/fetch-case")
async def fetch_case_route(request: Request, audit: AuditService = Depends(get_audit_service)):
    """Validate case identifiers and return the (simulated) case record"""
    payload = await _read_json_body(request)
    query = validate_case_query(payload)

    query_id = generate_query_id()
    await audit.record_query(query_id, query, _client_ip(request))

    try:
        record = await fetch_case(query)
    except Exception as e:
        logger.error(f"Error fetching case data: {e}", query_id=query_id)
        if isinstance(e, CourtFetcherError):
            await audit.record_failure(e.message)
            raise
        await audit.record_failure(str(e))
        raise CourtFetchError(str(e) or "Failed to fetch case data", court_name=settings.court_name) from e

    await audit.record_response(query_id, record)
    logger.info(f"Case fetched: {record.case_number}", query_id=query_id)

    response = FetchCaseResponse(
        data=record,
        query_id=query_id,
        message=f"Case data fetched successfully from {settings.court_name}",
    )
    return JSONResponse(content=response.to_json_dict())


@app.post("/api/download-pdf")
async def download_pdf(request: Request):
    """Return the order document for a PDF link"""
    payload = await _read_json_body(request)
    pdf_url = payload.get("pdfUrl") if isinstance(payload, dict) else None

    try:
        pdf_bytes = get_order_document(pdf_url)
    except CourtFetcherError:
        raise
    except Exception as e:
        logger.error(f"Error downloading PDF: {e}", exc_info=True)
        raise DocumentDownloadError(str(e) or None) from e

    logger.info(f"Serving order document for {pdf_url}")
    return Response(
        content=pdf_bytes,
        media_type=PDF_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{DOWNLOAD_FILENAME}"',
            "Cache-Control": "no-cache",
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "court_fetcher.api.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.debug,
    )
