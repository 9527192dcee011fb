# This project was developed with assistance from AI tools.
"""Tests for disbursements and AI-assisted sizing."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from helbflow_db.enums import DisbursementStatus

from helbflow.services.disbursement import InvalidStatusTransition, update_disbursement_status

from .factories import make_disbursement, make_student, mock_result

_PROFILE = {
    "course": "Engineering",
    "institution": "JKUAT",
    "region": "Kiambu",
    "year": 2,
    "semester": 1,
}


# ---------------------------------------------------------------------------
# Status workflow -- service layer
# ---------------------------------------------------------------------------


class TestStatusTransitions:
    @pytest.mark.asyncio
    async def test_completing_sets_processed_at(self, mock_session):
        disbursement = make_disbursement(status=DisbursementStatus.PROCESSING)
        mock_session.get = AsyncMock(return_value=disbursement)
        result = await update_disbursement_status(mock_session, 10, DisbursementStatus.COMPLETED)
        assert result.status is DisbursementStatus.COMPLETED
        assert result.processed_at is not None

    @pytest.mark.asyncio
    async def test_failed_can_be_retried(self, mock_session):
        failed = make_disbursement(status=DisbursementStatus.FAILED)
        mock_session.get = AsyncMock(return_value=failed)
        result = await update_disbursement_status(mock_session, 10, DisbursementStatus.PENDING)
        assert result.status is DisbursementStatus.PENDING
        assert result.processed_at is None

    @pytest.mark.asyncio
    async def test_completed_is_terminal(self, mock_session):
        mock_session.get = AsyncMock(
            return_value=make_disbursement(status=DisbursementStatus.COMPLETED)
        )
        with pytest.raises(InvalidStatusTransition, match="terminal"):
            await update_disbursement_status(mock_session, 10, DisbursementStatus.FAILED)
        mock_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, mock_session):
        mock_session.get = AsyncMock(return_value=None)
        assert await update_disbursement_status(mock_session, 99, DisbursementStatus.FAILED) is None


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


class TestCalculate:
    def test_returns_oracle_breakdown(self, client, oracle):
        resp = client.post("/api/disbursements/calculate", json=_PROFILE)
        assert resp.status_code == 200
        body = resp.json()
        assert Decimal(str(body["total"])) == Decimal("115000")
        assert body["isFallback"] is False
        assert oracle.calls == ["suggest_disbursement"]

    def test_oracle_failure_returns_defaults(self, client, oracle):
        oracle.fail = True
        resp = client.post("/api/disbursements/calculate", json=_PROFILE)
        assert resp.status_code == 200
        body = resp.json()
        assert Decimal(str(body["tuition"])) == Decimal("85000")
        assert Decimal(str(body["total"])) == Decimal("110500")
        assert body["reasoning"] == "Default calculation based on average costs"
        assert body["isFallback"] is True


class TestDisbursementRoutes:
    def test_create(self, client):
        resp = client.post(
            "/api/disbursements",
            json={
                "studentId": 1,
                "type": "tuition",
                "amount": "42500.00",
                "recipient": "university",
            },
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["status"] == "pending"
        assert body["recipient"] == "university"
        assert body["processedAt"] is None

    def test_create_rejects_unknown_type(self, client):
        resp = client.post(
            "/api/disbursements", json={"studentId": 1, "type": "laptop", "amount": "100"}
        )
        assert resp.status_code == 422

    def test_list_for_student(self, client, mock_session):
        mock_session.execute = AsyncMock(return_value=mock_result(scalars=[make_disbursement()]))
        resp = client.get("/api/disbursements", params={"student_id": 1})
        assert resp.status_code == 200
        assert resp.json()[0]["studentId"] == 1

    def test_recent_includes_student_name(self, client, mock_session):
        disbursement = make_disbursement(student=make_student())
        mock_session.execute = AsyncMock(return_value=mock_result(scalars=[disbursement]))
        resp = client.get("/api/disbursements/recent", params={"limit": 5})
        assert resp.status_code == 200
        assert resp.json()[0]["studentName"] == "Amani Wanjiru"

    def test_update_status(self, client, mock_session):
        mock_session.get = AsyncMock(return_value=make_disbursement())
        resp = client.patch("/api/disbursements/10/status", json={"status": "completed"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "completed"
        assert resp.json()["processedAt"] is not None

    def test_update_status_invalid_transition(self, client, mock_session):
        mock_session.get = AsyncMock(
            return_value=make_disbursement(status=DisbursementStatus.COMPLETED)
        )
        resp = client.patch("/api/disbursements/10/status", json={"status": "pending"})
        assert resp.status_code == 409

    def test_update_status_not_found(self, client, mock_session):
        mock_session.get = AsyncMock(return_value=None)
        resp = client.patch("/api/disbursements/99/status", json={"status": "failed"})
        assert resp.status_code == 404
