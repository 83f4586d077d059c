"""
Stream Routes

GET /streams - List all career streams, most popular first
GET /streams/{slug} - Stream detail with its courses and exams
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from career_guide.api.caching import cached_json_response
from career_guide.core.cache import TTLCache, build_cache_key, get_cache
from career_guide.core.config import Settings, get_settings
from career_guide.core.errors import NotFoundError
from career_guide.db.database import fetch_all, fetch_one, get_db, load_json_columns
from career_guide.db.query import SelectQuery
from career_guide.schemas.schemas import (
    CourseResponse, ExamResponse, Popularity, StreamDetailResponse, StreamResponse
)

router = APIRouter(prefix="/streams", tags=["Streams"])

STREAM_COLUMNS = [
    "id", "slug", "title", "subtitle", "description", "icon", "color", "paths",
    "average_salary", "duration", "popularity", "skills", "pros", "cons",
    "success_stories", "created_at", "updated_at",
]
STREAM_JSON_COLUMNS = ("paths", "skills", "pros", "cons", "success_stories")

COURSE_COLUMNS = [
    "id", "stream_id", "name", "duration", "fees", "eligibility", "description",
    "career_roles", "created_at", "updated_at",
]
EXAM_COLUMNS = [
    "id", "stream_id", "name", "month", "difficulty", "eligibility", "description",
    "registration_link", "created_at", "updated_at",
]

# Very High -> High -> Medium -> anything else
POPULARITY_ORDER = (
    "CASE popularity"
    f" WHEN '{Popularity.very_high.value}' THEN 1"
    f" WHEN '{Popularity.high.value}' THEN 2"
    f" WHEN '{Popularity.medium.value}' THEN 3"
    " ELSE 4 END"
)


def load_streams(db: Session) -> list:
    sql, params = SelectQuery("streams", STREAM_COLUMNS).order_by(POPULARITY_ORDER).build()
    return [
        StreamResponse(**load_json_columns(row, STREAM_JSON_COLUMNS))
        for row in fetch_all(db, sql, params)
    ]


def load_stream_detail(db: Session, slug: str) -> StreamDetailResponse:
    row = fetch_one(
        db,
        f"SELECT {', '.join(STREAM_COLUMNS)} FROM streams WHERE slug = :slug",
        {"slug": slug},
    )
    if row is None:
        raise NotFoundError("Stream not found")
    stream = StreamResponse(**load_json_columns(row, STREAM_JSON_COLUMNS))

    course_sql, course_params = (
        SelectQuery("courses", COURSE_COLUMNS).equals("stream_id", stream.id).order_by("name ASC").build()
    )
    exam_sql, exam_params = (
        SelectQuery("exams", EXAM_COLUMNS).equals("stream_id", stream.id).order_by("name ASC").build()
    )
    courses = [
        CourseResponse(**load_json_columns(r, ("career_roles",)))
        for r in fetch_all(db, course_sql, course_params)
    ]
    exams = [ExamResponse(**r) for r in fetch_all(db, exam_sql, exam_params)]

    return StreamDetailResponse(stream=stream, courses=courses, exams=exams)


@router.get("", response_model=List[StreamResponse])
async def list_streams(
    db: Session = Depends(get_db),
    cache: TTLCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
):
    """List every stream ordered by popularity (Very High, High, Medium, rest)."""
    return cached_json_response(
        cache, build_cache_key("streams"), lambda: load_streams(db), settings
    )


@router.get("/{slug}", response_model=StreamDetailResponse)
async def get_stream(
    slug: str,
    db: Session = Depends(get_db),
    cache: TTLCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
):
    """Get one stream by slug, with the courses and exams that belong to it."""
    return cached_json_response(
        cache,
        build_cache_key("streams/detail", {"slug": slug}),
        lambda: load_stream_detail(db, slug),
        settings,
    )
