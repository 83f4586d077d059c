"""
User Preference Routes

GET /user-preferences - Get own preferences
POST /user-preferences - Create preferences (once per user)
PUT /user-preferences - Update preferences (only provided fields change)

The caller is identified by the X-User-Id header set by the auth layer.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from career_guide.api.validation import check_percentage, check_string_list, optional_text, require_text
from career_guide.core.errors import ConflictError, NotFoundError
from career_guide.core.identity import get_current_user_id
from career_guide.db.database import dump_json, fetch_one, get_db, load_json_columns
from career_guide.schemas.schemas import PreferencesCreate, PreferencesResponse, PreferencesUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user-preferences", tags=["User Preferences"])

PREFERENCE_COLUMNS = (
    "id, user_id, district, interested_streams, marks_percentage, career_goals, created_at, updated_at"
)


def _to_response(row: dict) -> PreferencesResponse:
    return PreferencesResponse(**load_json_columns(row, ("interested_streams",)))


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("", response_model=PreferencesResponse)
async def get_preferences(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Get the caller's saved preferences."""
    row = fetch_one(
        db,
        f"SELECT {PREFERENCE_COLUMNS} FROM user_preferences WHERE user_id = :user_id",
        {"user_id": user_id},
    )
    if row is None:
        raise NotFoundError("Preferences not found")
    return _to_response(row)


@router.post("", response_model=PreferencesResponse, status_code=201)
async def create_preferences(
    data: PreferencesCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Create preferences. Fails with 409 if the user already has them; use PUT.

    The UNIQUE constraint on user_id decides the conflict, so two racing
    creates cannot both succeed.
    """
    district = require_text(data.district, "district", "District", code="MISSING_DISTRICT")
    streams = check_string_list(
        data.interested_streams,
        "interested_streams",
        "Interested streams is required and must be an array",
        code="MISSING_INTERESTED_STREAMS",
    )
    marks = check_percentage(data.marks_percentage, "marks_percentage", "INVALID_MARKS_PERCENTAGE")
    now = _utc_now()

    try:
        result = db.execute(
            text(f"""
                INSERT INTO user_preferences
                    (user_id, district, interested_streams, marks_percentage, career_goals, created_at, updated_at)
                VALUES (:user_id, :district, :streams, :marks, :goals, :now, :now)
                RETURNING {PREFERENCE_COLUMNS}
            """),
            {
                "user_id": user_id, "district": district,
                "streams": dump_json(streams), "marks": marks,
                "goals": optional_text(data.career_goals), "now": now,
            }
        )
        row = dict(result.mappings().one())
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Preferences already exist for user %s", user_id)
        raise ConflictError("Preferences already exist, use PUT to update")

    return _to_response(row)


@router.put("", response_model=PreferencesResponse)
async def update_preferences(
    data: PreferencesUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Update preferences. Only fields present in the body are changed."""
    provided = data.model_fields_set
    updates = ["updated_at = :updated_at"]
    params = {"user_id": user_id, "updated_at": _utc_now()}

    if "district" in provided:
        updates.append("district = :district")
        params["district"] = require_text(data.district, "district", "District", code="MISSING_DISTRICT")
    if "interested_streams" in provided:
        streams = check_string_list(
            data.interested_streams,
            "interested_streams",
            "Interested streams must be an array",
            code="INVALID_INTERESTED_STREAMS",
        )
        updates.append("interested_streams = :interested_streams")
        params["interested_streams"] = dump_json(streams)
    if "marks_percentage" in provided:
        updates.append("marks_percentage = :marks_percentage")
        params["marks_percentage"] = check_percentage(
            data.marks_percentage, "marks_percentage", "INVALID_MARKS_PERCENTAGE"
        )
    if "career_goals" in provided:
        updates.append("career_goals = :career_goals")
        params["career_goals"] = optional_text(data.career_goals)

    result = db.execute(
        text(f"""
            UPDATE user_preferences SET {', '.join(updates)}
            WHERE user_id = :user_id
            RETURNING {PREFERENCE_COLUMNS}
        """),
        params
    )
    row = result.mappings().first()
    if row is None:
        db.rollback()
        raise NotFoundError("Preferences not found")
    row = dict(row)
    db.commit()

    return _to_response(row)
