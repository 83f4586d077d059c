"""
Field checks for write endpoints. Run before anything touches storage.
"""

import logging
from typing import Any, List, Optional

from career_guide.core.errors import ValidationError

logger = logging.getLogger(__name__)


def require_text(value: Optional[str], field: str, label: str, code: str = "VALIDATION_ERROR") -> str:
    """Return the trimmed value, or reject a missing/blank field."""
    trimmed = (value or "").strip()
    if not trimmed:
        logger.info("Rejected write: %s is empty", field)
        raise ValidationError(f"{label} is required and cannot be empty", code=code, field=field)
    return trimmed


def check_email(email: str, field: str = "email") -> str:
    """
    Minimal email check: must contain '@'. Returns the address lower-cased.
    """
    if "@" not in email:
        logger.info("Rejected write: email without '@'")
        raise ValidationError("Invalid email format. Email must contain @ symbol", field=field)
    return email.lower()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Trim optional free text; blank becomes None."""
    if value is None:
        return None
    return value.strip() or None


def check_string_list(value: Any, field: str, message: str, code: str) -> List[str]:
    """Accept only a JSON array of strings (empty is fine)."""
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        logger.info("Rejected write: %s is not an array of strings", field)
        raise ValidationError(message, code=code, field=field)
    return value


def check_percentage(value: Optional[float], field: str, code: str) -> Optional[float]:
    if value is None:
        return None
    if not 0 <= value <= 100:
        raise ValidationError(f"{field} must be between 0 and 100", code=code, field=field)
    return value
