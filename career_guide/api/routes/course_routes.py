"""
Course and Exam Routes

GET /courses - List courses, optionally for one stream
GET /exams - List entrance exams, optionally for one stream
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from career_guide.api.params import Page, get_optional_page, get_stream_id
from career_guide.api.routes.stream_routes import COURSE_COLUMNS, EXAM_COLUMNS
from career_guide.db.database import fetch_all, get_db, load_json_columns
from career_guide.db.query import SelectQuery
from career_guide.schemas.schemas import CourseResponse, ExamResponse

router = APIRouter(tags=["Courses & Exams"])


@router.get("/courses", response_model=List[CourseResponse])
async def list_courses(
    stream_id: Optional[int] = Depends(get_stream_id),
    page: Page = Depends(get_optional_page),
    db: Session = Depends(get_db),
):
    """List courses by name. ?stream_id must be an integer."""
    sql, params = (
        SelectQuery("courses", COURSE_COLUMNS)
        .equals("stream_id", stream_id)
        .order_by("name ASC")
        .paginate(page.limit, page.offset)
        .build()
    )
    return [
        CourseResponse(**load_json_columns(row, ("career_roles",)))
        for row in fetch_all(db, sql, params)
    ]


@router.get("/exams", response_model=List[ExamResponse])
async def list_exams(
    stream_id: Optional[int] = Depends(get_stream_id),
    page: Page = Depends(get_optional_page),
    db: Session = Depends(get_db),
):
    """List exams by name. ?stream_id must be an integer."""
    sql, params = (
        SelectQuery("exams", EXAM_COLUMNS)
        .equals("stream_id", stream_id)
        .order_by("name ASC")
        .paginate(page.limit, page.offset)
        .build()
    )
    return [ExamResponse(**row) for row in fetch_all(db, sql, params)]
