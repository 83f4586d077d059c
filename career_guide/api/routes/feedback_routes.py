"""
Feedback Routes

POST /feedback - Submit feedback from the contact page
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from career_guide.api.validation import check_email, require_text
from career_guide.db.database import get_db
from career_guide.schemas.schemas import FeedbackCreate, FeedbackResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feedback", tags=["Feedback"])


@router.post("", response_model=FeedbackResponse, status_code=201)
async def submit_feedback(data: FeedbackCreate, db: Session = Depends(get_db)):
    """
    Store one feedback message.

    name, district, message and email are required; email must contain '@'.
    Feedback is append-only.
    """
    name = require_text(data.name, "name", "Name")
    district = require_text(data.district, "district", "District")
    message = require_text(data.message, "message", "Message")
    email = check_email(require_text(data.email, "email", "Email"))
    user_id = (data.user_id or "").strip() or None

    result = db.execute(
        text("""
            INSERT INTO feedback (user_id, name, district, message, email, created_at)
            VALUES (:user_id, :name, :district, :message, :email, :created_at)
            RETURNING id, user_id, name, district, message, email, created_at
        """),
        {
            "user_id": user_id, "name": name, "district": district,
            "message": message, "email": email,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
    )
    row = dict(result.mappings().one())
    db.commit()

    logger.info("Feedback %s received from %s", row["id"], district)
    return FeedbackResponse(**row)
