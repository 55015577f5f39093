from typing import Any, Dict, List

import pytest
from flask import Flask, g
from sqlalchemy import create_engine, text

from sweet_shop.core import db as slow_db
from sweet_shop.schemas.dtos import TokenClaims


def _capture_logger_calls(monkeypatch, marker: str) -> List[Dict[str, Any]]:
    """Record slow-query warnings whose statement contains ``marker``."""
    records: List[Dict[str, Any]] = []

    def record_warning(message: str, *args, **kwargs):
        context = kwargs.get("extra", {}).get("context") or {}
        if marker in context.get("statement", ""):
            records.append({"message": message, "context": context})

    monkeypatch.setattr(slow_db.logger, "warning", record_warning)
    return records


def test_slow_query_alert_masks_sensitive_params(monkeypatch):
    records = _capture_logger_calls(monkeypatch, "AS p,")
    engine = create_engine("sqlite:///:memory:")
    slow_db.register_query_timing(engine, threshold_ms=0)

    with engine.connect() as conn:
        conn.execute(
            text("SELECT :password AS p, :quantity AS q"),
            {"password": "hunter2", "quantity": 3},
        )

    assert len(records) == 1
    context = records[0]["context"]
    assert records[0]["message"] == "Slow query detected"
    assert context["alert_type"] == "slow_query"
    assert context["params"]["password"] == "***"
    assert context["params"]["quantity"] == "3"
    assert "hunter2" not in str(context)


def test_slow_query_alert_includes_request_context(monkeypatch):
    records = _capture_logger_calls(monkeypatch, "SELECT 1")
    engine = create_engine("sqlite:///:memory:")
    slow_db.register_query_timing(engine, threshold_ms=0)

    app = Flask(__name__)
    with app.test_request_context("/api/sweets", method="GET"):
        g.request_id = "req-123"
        g.current_user = TokenClaims(user_id=42, email="buyer@example.com")
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    context = records[0]["context"]
    assert context["request_id"] == "req-123"
    assert context["user_id"] == 42


def test_fast_queries_are_not_reported(monkeypatch):
    records = _capture_logger_calls(monkeypatch, "SELECT 1")
    engine = create_engine("sqlite:///:memory:")
    slow_db.register_query_timing(engine, threshold_ms=60_000)

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))

    assert records == []


def test_registration_is_idempotent(monkeypatch):
    records = _capture_logger_calls(monkeypatch, "SELECT 1")
    engine = create_engine("sqlite:///:memory:")
    slow_db.register_query_timing(engine, threshold_ms=0)
    slow_db.register_query_timing(engine, threshold_ms=0)

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))

    assert len(records) == 1


@pytest.mark.parametrize(
    "params, expected",
    [
        ({"email": "a@b.co", "name": "Toffee"}, {"email": "***", "name": "Toffee"}),
        ([{"token": "abc"}], [{"token": "***"}]),
        (b"\x00\x01", "<binary>"),
    ],
)
def test_mask_params(params, expected):
    assert slow_db._mask_params(params) == expected
