# This project was developed with assistance from AI tools.
"""Tests for transactions and auto-categorization."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

from helbflow.services.transaction import month_bounds

from .factories import make_transaction, mock_result


def test_month_bounds():
    assert month_bounds(2026, 3) == (
        datetime(2026, 3, 1, tzinfo=UTC),
        datetime(2026, 4, 1, tzinfo=UTC),
    )


def test_month_bounds_december_rolls_year():
    assert month_bounds(2025, 12)[1] == datetime(2026, 1, 1, tzinfo=UTC)


class TestCreateTransaction:
    def test_blank_category_is_auto_categorized(self, client, oracle):
        resp = client.post(
            "/api/transactions",
            json={"studentId": 1, "amount": "350.00", "description": "Matatu to campus"},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["category"] == "food"
        assert body["isAutoCategorized"] is True
        assert oracle.calls == ["categorize_transaction"]

    def test_explicit_category_is_normalized(self, client, oracle):
        resp = client.post(
            "/api/transactions",
            json={"studentId": 1, "amount": "1200", "category": " Books ", "description": "Atlas"},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["category"] == "books"
        assert body["isAutoCategorized"] is False
        assert oracle.calls == []

    def test_oracle_failure_uses_other(self, client, oracle):
        oracle.fail = True
        resp = client.post(
            "/api/transactions", json={"studentId": 1, "amount": "80", "category": "  "}
        )
        assert resp.status_code == 201
        assert resp.json()["category"] == "other"
        assert resp.json()["isAutoCategorized"] is True

    def test_rejects_non_positive_amount(self, client):
        resp = client.post("/api/transactions", json={"studentId": 1, "amount": "0"})
        assert resp.status_code == 422


class TestListTransactions:
    def test_list(self, client, mock_session):
        mock_session.execute = AsyncMock(return_value=mock_result(scalars=[make_transaction()]))
        resp = client.get("/api/transactions/1")
        assert resp.status_code == 200
        assert resp.json()[0]["category"] == "food"

    def test_list_for_month(self, client, mock_session):
        mock_session.execute = AsyncMock(return_value=mock_result(scalars=[]))
        resp = client.get("/api/transactions/1/month/2026/3")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_invalid_month_rejected(self, client):
        resp = client.get("/api/transactions/1/month/2026/13")
        assert resp.status_code == 422
        assert resp.json()["code"] == "validation_error"
