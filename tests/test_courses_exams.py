"""Tests for GET /api/courses and GET /api/exams."""

import pytest

from career_guide.db import tables
from factories import insert_rows, make_course, make_exam, make_stream


@pytest.fixture
def stream_ids(engine):
    return insert_rows(engine, tables.streams, [
        make_stream("engineering", "Engineering"),
        make_stream("medical", "Medical"),
    ])


@pytest.fixture
def seeded(engine, stream_ids):
    engineering, medical = stream_ids
    insert_rows(engine, tables.courses, [
        make_course("Mechanical", engineering),
        make_course("MBBS", medical),
        make_course("Civil", engineering),
        make_course("Bridge Course", None),
    ])
    insert_rows(engine, tables.exams, [
        make_exam("NEET", medical),
        make_exam("JEE Main", engineering),
        make_exam("AIIMS", medical, registration_link=None),
    ])


class TestListCourses:

    def test_all_courses_by_name(self, client, seeded):
        response = client.get("/api/courses")
        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Bridge Course", "Civil", "MBBS", "Mechanical"]

    def test_filter_by_stream_id(self, client, seeded, stream_ids):
        body = client.get("/api/courses", params={"stream_id": stream_ids[0]}).json()
        assert [c["name"] for c in body] == ["Civil", "Mechanical"]
        assert all(c["stream_id"] == stream_ids[0] for c in body)

    def test_orphan_course_kept(self, client, seeded):
        orphan = [c for c in client.get("/api/courses").json() if c["name"] == "Bridge Course"][0]
        assert orphan["stream_id"] is None

    def test_invalid_stream_id(self, client, seeded):
        response = client.get("/api/courses", params={"stream_id": "abc"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_STREAM_ID"

    def test_unknown_stream_id_is_empty(self, client, seeded):
        assert client.get("/api/courses", params={"stream_id": 999}).json() == []


class TestListExams:

    def test_filter_by_stream_id(self, client, seeded, stream_ids):
        body = client.get("/api/exams", params={"stream_id": stream_ids[1]}).json()
        assert [e["name"] for e in body] == ["AIIMS", "NEET"]
        assert body[0]["registration_link"] is None

    def test_invalid_stream_id(self, client, seeded):
        response = client.get("/api/exams", params={"stream_id": "1.5"})
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "INVALID_STREAM_ID"
        assert "error" in body

    def test_limit(self, client, seeded):
        assert len(client.get("/api/exams", params={"limit": 1}).json()) == 1


class TestUnpagedLists:

    def test_courses_not_cut_at_fifty(self, client, engine, stream_ids):
        insert_rows(engine, tables.courses, [make_course(f"Course {i:02d}", stream_ids[0]) for i in range(60)])
        assert len(client.get("/api/courses").json()) == 60

    def test_exams_not_cut_at_fifty(self, client, engine, stream_ids):
        insert_rows(engine, tables.exams, [make_exam(f"Exam {i:02d}", stream_ids[1]) for i in range(55)])
        assert len(client.get("/api/exams", params={"stream_id": stream_ids[1]}).json()) == 55
