"""Tests for query/response audit logging."""
import random
import re

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from court_fetcher.database.models import CaseQueryLog, CaseResponseLog
from court_fetcher.services.audit_service import AuditService, generate_query_id
from court_fetcher.services.case_service import build_case_record

QUERY_ID_RE = re.compile(r"^query_\d{13}_[a-z0-9]{9}$")


def _rows(session_factory, model):
    with session_factory() as db:
        return db.execute(select(model)).scalars().all()


def test_query_id_format():
    assert QUERY_ID_RE.match(generate_query_id())
    assert generate_query_id("error").startswith("error_")


def test_query_ids_differ():
    rng = random.Random(3)
    assert generate_query_id(rng=rng) != generate_query_id(rng=rng)


@pytest.mark.asyncio
async def test_record_query(audit_service, session_factory, writ_query):
    assert await audit_service.record_query("query_1", writ_query, "10.0.0.1") is True

    [row] = _rows(session_factory, CaseQueryLog)
    assert row.id == "query_1"
    assert row.case_type == "writ"
    assert row.case_number == "12345"
    assert row.filing_year == "2024"
    assert row.ip_address == "10.0.0.1"
    assert row.query_timestamp is not None


@pytest.mark.asyncio
async def test_record_response_stores_camel_case_record(
    audit_service, session_factory, writ_query, rng, fixed_now
):
    record = build_case_record(writ_query, rng=rng, now=fixed_now)
    assert await audit_service.record_response("query_1", record) is True

    [row] = _rows(session_factory, CaseResponseLog)
    assert row.query_id == "query_1"
    assert row.success is True
    assert row.error_message is None
    assert row.case_data["caseNumber"] == "W.P.(C) 12345/2024"
    assert row.case_data == record.to_json_dict()


@pytest.mark.asyncio
async def test_record_failure(audit_service, session_factory):
    assert await audit_service.record_failure("court unreachable") is True

    [row] = _rows(session_factory, CaseResponseLog)
    assert row.query_id.startswith("error_")
    assert row.success is False
    assert row.case_data == {}
    assert row.error_message == "court unreachable"


@pytest.mark.asyncio
async def test_disabled_service_is_noop(writ_query):
    service = AuditService()
    assert service.enabled is False
    assert await service.record_query("query_1", writ_query, "unknown") is False
    assert await service.record_failure("boom") is False


@pytest.mark.asyncio
async def test_database_errors_are_swallowed(tmp_path, writ_query, caplog):
    # No tables created
    engine = create_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    service = AuditService(sessionmaker(bind=engine))

    with caplog.at_level("ERROR", logger="court_fetcher"):
        assert await service.record_query("query_1", writ_query, "unknown") is False
        assert await service.record_failure("boom") is False

    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("Database logging error:") for m in messages)
    assert any(m.startswith("Database error logging error:") for m in messages)
    engine.dispose()


@pytest.mark.asyncio
async def test_non_ascii_case_data_round_trips(audit_service, session_factory, writ_query, rng, fixed_now):
    record = build_case_record(writ_query, rng=rng, now=fixed_now)
    record.parties.petitioner = "श्री राम कुमार"
    await audit_service.record_response("query_2", record)

    [row] = _rows(session_factory, CaseResponseLog)
    assert row.case_data["parties"]["petitioner"] == "श्री राम कुमार"
