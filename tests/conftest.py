"""
Shared fixtures.

Environment is pinned before court_fetcher is imported: no audit database,
no simulated latency, no debug file logging.
"""
import os

os.environ["DATABASE_URL"] = ""
os.environ["DB_HOST"] = ""
os.environ["SIMULATED_LATENCY_MIN"] = "0"
os.environ["SIMULATED_LATENCY_MAX"] = "0"
os.environ["DEBUG"] = "false"
os.environ["LOG_TO_FILE"] = "false"
os.environ["ENVIRONMENT"] = "test"

import random
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from court_fetcher.api.main import app, get_audit_service
from court_fetcher.database.connection import Base
import court_fetcher.database.models  # noqa: F401
from court_fetcher.schemas import CaseQuery
from court_fetcher.services.audit_service import AuditService


# =============================================================================
# Audit database
# =============================================================================

@pytest.fixture
def audit_engine(tmp_path):
    """SQLite engine with the audit tables created."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'audit.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(audit_engine):
    return sessionmaker(bind=audit_engine, autoflush=False)


@pytest.fixture
def audit_service(session_factory):
    return AuditService(session_factory)


# =============================================================================
# Case data
# =============================================================================

@pytest.fixture
def writ_query():
    return CaseQuery(case_type="writ", case_number="12345", filing_year=2024)


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 19, 16, 5, 9)


# =============================================================================
# HTTP
# =============================================================================

@pytest.fixture
def client(audit_service):
    """TestClient with auditing routed to the temporary SQLite database."""
    app.dependency_overrides[get_audit_service] = lambda: audit_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
