# This project was developed with assistance from AI tools.
"""Tests for student registration and lookup."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from helbflow.schemas.student import StudentCreate
from helbflow.services.student import DuplicateStudentError, create_student

from .factories import make_student, mock_result

_BODY = {
    "studentNumber": "S001",
    "firstName": "Amani",
    "lastName": "Wanjiru",
    "email": "amani@students.example.ac.ke",
    "course": "Computer Science",
    "institution": "University of Nairobi",
    "region": "Nairobi",
    "year": 2,
    "semester": 1,
}


def _duplicate_error():
    return IntegrityError("INSERT INTO students", {}, Exception("duplicate key"))


class TestCreateStudentService:
    @pytest.mark.asyncio
    async def test_creates_and_refreshes(self, mock_session):
        student = await create_student(mock_session, StudentCreate.model_validate(_BODY))
        assert student.id == 1
        assert student.student_number == "S001"
        mock_session.add.assert_called_once_with(student)
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_duplicate_number_raises_and_rolls_back(self, mock_session):
        mock_session.commit = AsyncMock(side_effect=_duplicate_error())
        with pytest.raises(DuplicateStudentError, match="S001"):
            await create_student(mock_session, StudentCreate.model_validate(_BODY))
        mock_session.rollback.assert_awaited_once()


class TestStudentRoutes:
    def test_create_returns_camel_case(self, client):
        resp = client.post("/api/students", json=_BODY)
        assert resp.status_code == 201
        body = resp.json()
        assert body["id"] == 1
        assert body["studentNumber"] == "S001"
        assert body["firstName"] == "Amani"

    def test_create_duplicate_returns_409(self, client, mock_session):
        mock_session.commit = AsyncMock(side_effect=_duplicate_error())
        resp = client.post("/api/students", json=_BODY)
        assert resp.status_code == 409
        assert resp.json()["title"] == "Conflict"

    def test_create_rejects_bad_year(self, client):
        resp = client.post("/api/students", json={**_BODY, "year": 0})
        assert resp.status_code == 422

    def test_list(self, client, mock_session):
        students = [make_student(), make_student(id=2, student_number="S002")]
        mock_session.execute = AsyncMock(return_value=mock_result(scalars=students))
        resp = client.get("/api/students")
        assert resp.status_code == 200
        assert [s["id"] for s in resp.json()] == [1, 2]

    def test_get_by_id(self, client, mock_session):
        mock_session.get = AsyncMock(return_value=make_student())
        resp = client.get("/api/students/1")
        assert resp.status_code == 200
        assert resp.json()["institution"] == "University of Nairobi"

    def test_get_by_id_not_found(self, client, mock_session):
        mock_session.get = AsyncMock(return_value=None)
        resp = client.get("/api/students/99")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Student not found"

    def test_get_by_student_number(self, client, mock_session):
        student = make_student(student_number="S001")
        mock_session.execute = AsyncMock(return_value=mock_result(one_or_none=student))
        resp = client.get("/api/students/by-student-id/S001")
        assert resp.status_code == 200
        assert resp.json()["studentNumber"] == "S001"

    def test_get_by_student_number_not_found(self, client, mock_session):
        mock_session.execute = AsyncMock(return_value=mock_result(one_or_none=None))
        resp = client.get("/api/students/by-student-id/NOPE")
        assert resp.status_code == 404
