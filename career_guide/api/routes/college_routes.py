"""
College Routes

GET /colleges - Local college search, best rated first
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from career_guide.api.caching import cached_json_response
from career_guide.api.params import Page, get_optional_page, normalize_filter
from career_guide.core.cache import TTLCache, build_cache_key, get_cache
from career_guide.core.config import Settings, get_settings
from career_guide.db.database import fetch_all, get_db, load_json_columns
from career_guide.db.query import SelectQuery
from career_guide.schemas.schemas import CollegeResponse

router = APIRouter(prefix="/colleges", tags=["Colleges"])

COLLEGE_COLUMNS = [
    "id", "name", "location", "district", "state", "stream", "type", "rating",
    "fees", "courses_offered", "contact", "email", "website", "affiliation",
    "latitude", "longitude", "created_at", "updated_at",
]


def load_colleges(db: Session, filters: dict, search: Optional[str], page: Page) -> List[CollegeResponse]:
    query = SelectQuery("colleges", COLLEGE_COLUMNS).search(search, "name", "location")
    for column, value in filters.items():
        query.equals(column, value)
    query.order_by("rating DESC", "name ASC").paginate(page.limit, page.offset)

    sql, params = query.build()
    return [
        CollegeResponse(**load_json_columns(row, ("courses_offered",)))
        for row in fetch_all(db, sql, params)
    ]


@router.get("", response_model=List[CollegeResponse])
async def list_colleges(
    state: Optional[str] = Query(None),
    district: Optional[str] = Query(None),
    stream: Optional[str] = Query(None),
    type: Optional[str] = Query(None, description="e.g. Government, Private"),
    search: Optional[str] = Query(None, description="Search in name and location"),
    page: Page = Depends(get_optional_page),
    db: Session = Depends(get_db),
    cache: TTLCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
):
    """
    List colleges matching every supplied filter.

    Ordered by rating (highest first), then name.
    """
    filters = {
        "state": normalize_filter(state),
        "district": normalize_filter(district),
        "stream": normalize_filter(stream),
        "type": normalize_filter(type),
    }
    search = (search or "").strip() or None

    key = build_cache_key(
        "colleges",
        {**filters, "search": search.lower() if search else None, "limit": page.limit, "offset": page.offset},
    )
    return cached_json_response(
        cache, key, lambda: load_colleges(db, filters, search, page), settings
    )
