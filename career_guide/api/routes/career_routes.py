"""
Career Routes

GET /careers - Search, filter, sort and paginate career listings (salary insights)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from career_guide.api.caching import cached_json_response
from career_guide.api.params import Page, get_page, normalize_filter
from career_guide.core.cache import TTLCache, build_cache_key, get_cache
from career_guide.core.config import Settings, get_settings
from career_guide.db.database import fetch_all, get_db, load_json_columns
from career_guide.db.query import SelectQuery
from career_guide.schemas.schemas import CareerResponse, CareerSort

router = APIRouter(prefix="/careers", tags=["Careers"])

CAREER_COLUMNS = [
    "id", "career", "qualification", "stream", "avg_salary", "salary_numeric",
    "job_type", "demand", "growth_rate", "role_models", "created_at", "updated_at",
]

SORT_ORDER = {
    CareerSort.salary: "salary_numeric DESC",
    CareerSort.name: "career ASC",
}


def resolve_sort(sort: Optional[str]) -> CareerSort:
    """Unknown or missing sort values fall back to salary."""
    try:
        return CareerSort((sort or "").strip().lower())
    except ValueError:
        return CareerSort.salary


def load_careers(
    db: Session,
    search: Optional[str],
    stream: Optional[str],
    demand: Optional[str],
    sort: CareerSort,
    page: Page,
) -> List[CareerResponse]:
    query = (
        SelectQuery("careers", CAREER_COLUMNS)
        .search(search, "career", "qualification")
        .equals("stream", stream, case_insensitive=True)
        .equals("demand", demand, case_insensitive=True)
        .order_by(SORT_ORDER[sort])
        .paginate(page.limit, page.offset)
    )
    sql, params = query.build()
    return [
        CareerResponse(**load_json_columns(row, ("role_models",)))
        for row in fetch_all(db, sql, params)
    ]


@router.get("", response_model=List[CareerResponse])
async def list_careers(
    search: Optional[str] = Query(None, description="Search in career name and qualification"),
    stream: Optional[str] = Query(None, description="Exact stream, e.g. Engineering ('all' = any)"),
    demand: Optional[str] = Query(None, description="Exact demand level, e.g. High ('all' = any)"),
    sort: Optional[str] = Query(None, description="'salary' (default, highest first) or 'name'"),
    page: Page = Depends(get_page),
    db: Session = Depends(get_db),
    cache: TTLCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
):
    """List careers with filters, sorting and pagination."""
    search = (search or "").strip() or None
    stream = normalize_filter(stream)
    demand = normalize_filter(demand)
    sort_by = resolve_sort(sort)

    key = build_cache_key(
        "careers",
        {
            "search": search.lower() if search else None,
            "stream": stream.lower() if stream else None,
            "demand": demand.lower() if demand else None,
            "sort": sort_by.value,
            "limit": page.limit,
            "offset": page.offset,
        },
    )
    return cached_json_response(
        cache,
        key,
        lambda: load_careers(db, search, stream, demand, sort_by, page),
        settings,
    )
