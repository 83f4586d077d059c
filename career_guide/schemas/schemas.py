"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


# ============================================================
# ENUMS
# ============================================================

class CareerSort(str, Enum):
    salary = "salary"
    name = "name"


class Popularity(str, Enum):
    very_high = "Very High"
    high = "High"
    medium = "Medium"


# ============================================================
# STREAM SCHEMAS
# ============================================================

class StreamResponse(BaseModel):
    id: int
    slug: str
    title: str
    subtitle: Optional[str] = None
    description: str
    icon: str
    color: str
    paths: List[Any] = []
    average_salary: str
    duration: str
    popularity: str
    skills: List[Any] = []
    pros: List[Any] = []
    cons: List[Any] = []
    success_stories: List[Any] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CourseResponse(BaseModel):
    id: int
    stream_id: Optional[int] = None
    name: str
    duration: str
    fees: str
    eligibility: str
    description: str
    career_roles: List[Any] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ExamResponse(BaseModel):
    id: int
    stream_id: Optional[int] = None
    name: str
    month: str
    difficulty: str
    eligibility: str
    description: str
    registration_link: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StreamDetailResponse(BaseModel):
    stream: StreamResponse
    courses: List[CourseResponse] = []
    exams: List[ExamResponse] = []


# ============================================================
# CAREER SCHEMAS
# ============================================================

class CareerResponse(BaseModel):
    id: int
    career: str
    qualification: str
    stream: str
    avg_salary: str
    salary_numeric: int
    job_type: str
    demand: str
    growth_rate: str
    role_models: List[Any] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================
# COLLEGE SCHEMAS
# ============================================================

class CollegeResponse(BaseModel):
    id: int
    name: str
    location: str
    district: str
    state: str
    stream: str
    type: str
    rating: float
    fees: str
    courses_offered: List[Any] = []
    contact: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    affiliation: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================
# FEEDBACK SCHEMAS
# ============================================================

class FeedbackCreate(BaseModel):
    # Presence and emptiness are checked by the route so each field gets
    # its own error message
    name: Optional[str] = None
    district: Optional[str] = None
    message: Optional[str] = None
    email: Optional[str] = None
    user_id: Optional[str] = None


class FeedbackResponse(BaseModel):
    id: int
    user_id: Optional[str] = None
    name: str
    district: str
    message: str
    email: str
    created_at: datetime


# ============================================================
# USER PREFERENCE SCHEMAS
# ============================================================

class PreferencesCreate(BaseModel):
    district: Optional[str] = None
    interested_streams: Optional[Any] = None  # checked by the route for its own error code
    marks_percentage: Optional[float] = None
    career_goals: Optional[str] = None


class PreferencesUpdate(BaseModel):
    """Partial update - only fields present in the body are applied."""
    district: Optional[str] = None
    interested_streams: Optional[Any] = None  # checked by the route for its own error code
    marks_percentage: Optional[float] = None
    career_goals: Optional[str] = None


class PreferencesResponse(BaseModel):
    id: int
    user_id: str
    district: str
    interested_streams: List[str] = []
    marks_percentage: Optional[float] = None
    career_goals: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class HealthResponse(BaseModel):
    status: str
    database: str
    cache: Dict[str, int]
