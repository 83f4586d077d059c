"""Tests for GET /api/streams and GET /api/streams/{slug}."""

import pytest

from career_guide.db import tables
from factories import insert_rows, make_course, make_exam, make_stream


@pytest.fixture
def streams(engine):
    ids = insert_rows(engine, tables.streams, [
        make_stream("arts", "Arts", popularity="Medium"),
        make_stream("engineering", "Engineering", popularity="Very High"),
        make_stream("commerce", "Commerce", popularity="High"),
        make_stream("vocational", "Vocational", popularity="Low"),
        make_stream("medical", "Medical", popularity="Very High"),
    ])
    return dict(zip(["arts", "engineering", "commerce", "vocational", "medical"], ids))


class TestListStreams:

    def test_ordered_by_popularity_then_id(self, client, streams):
        response = client.get("/api/streams")
        assert response.status_code == 200
        assert [s["slug"] for s in response.json()] == [
            "engineering", "medical", "commerce", "arts", "vocational",
        ]

    def test_json_columns_are_lists(self, client, streams):
        stream = client.get("/api/streams").json()[0]
        assert stream["paths"] == ["Engineering path"]
        assert stream["skills"] == ["Maths"]
        assert stream["success_stories"] == []

    def test_empty_table(self, client):
        response = client.get("/api/streams")
        assert response.status_code == 200
        assert response.json() == []

    def test_cached_after_first_read(self, client, streams, engine):
        assert client.get("/api/streams").headers["X-Cache"] == "MISS"
        insert_rows(engine, tables.streams, [make_stream("law", "Law", popularity="Very High")])
        cached = client.get("/api/streams")
        assert cached.headers["X-Cache"] == "HIT"
        assert "law" not in [s["slug"] for s in cached.json()]


class TestStreamDetail:

    @pytest.fixture
    def related(self, engine, streams):
        engineering = streams["engineering"]
        insert_rows(engine, tables.courses, [
            make_course("Mechanical Engineering", engineering),
            make_course("B.Tech CSE", engineering),
            make_course("MBBS", streams["medical"]),
            make_course("Orphan Course", None),
        ])
        insert_rows(engine, tables.exams, [
            make_exam("JEE Main", engineering),
            make_exam("EAMCET", engineering),
            make_exam("NEET", streams["medical"]),
        ])

    def test_returns_stream_with_courses_and_exams(self, client, related):
        response = client.get("/api/streams/engineering")
        assert response.status_code == 200
        body = response.json()
        assert body["stream"]["slug"] == "engineering"
        assert [c["name"] for c in body["courses"]] == ["B.Tech CSE", "Mechanical Engineering"]
        assert [e["name"] for e in body["exams"]] == ["EAMCET", "JEE Main"]
        assert body["courses"][0]["career_roles"] == ["Engineer"]

    def test_stream_without_related_rows(self, client, streams):
        body = client.get("/api/streams/arts").json()
        assert body["courses"] == []
        assert body["exams"] == []

    def test_unknown_slug_is_404(self, client, streams, cache):
        response = client.get("/api/streams/unknown-slug")
        assert response.status_code == 404
        body = response.json()
        assert "error" in body
        assert body["code"] == "NOT_FOUND"
        assert len(cache) == 0

    def test_detail_cached_per_slug(self, client, related):
        assert client.get("/api/streams/engineering").headers["X-Cache"] == "MISS"
        assert client.get("/api/streams/medical").headers["X-Cache"] == "MISS"
        assert client.get("/api/streams/engineering").headers["X-Cache"] == "HIT"
