"""
Table definitions (SQLAlchemy Core).

Routes query with raw SQL; these definitions exist so the schema can be
created on a fresh database (scripts/init_db.py, tests) and so the
constraints the API relies on live in one place:
- streams.slug is UNIQUE (routing key)
- user_preferences.user_id is UNIQUE (one row per user; a duplicate insert
  is how a create conflict is detected)
"""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.engine import Engine

metadata = MetaData()


def _timestamps():
    return [
        Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
        Column("updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    ]


streams = Table(
    "streams",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("slug", String(100), nullable=False),
    Column("title", String(200), nullable=False),
    Column("subtitle", String(300)),
    Column("description", Text, nullable=False),
    Column("icon", String(100), nullable=False),
    Column("color", String(100), nullable=False),
    Column("paths", JSON, nullable=False),
    Column("average_salary", String(100), nullable=False),
    Column("duration", String(100), nullable=False),
    Column("popularity", String(50), nullable=False),
    Column("skills", JSON, nullable=False),
    Column("pros", JSON, nullable=False),
    Column("cons", JSON, nullable=False),
    Column("success_stories", JSON, nullable=False),
    *_timestamps(),
    UniqueConstraint("slug", name="uq_streams_slug"),
)

courses = Table(
    "courses",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("stream_id", Integer, ForeignKey("streams.id")),
    Column("name", String(200), nullable=False),
    Column("duration", String(100), nullable=False),
    Column("fees", String(100), nullable=False),
    Column("eligibility", Text, nullable=False),
    Column("description", Text, nullable=False),
    Column("career_roles", JSON, nullable=False),
    *_timestamps(),
)

exams = Table(
    "exams",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("stream_id", Integer, ForeignKey("streams.id")),
    Column("name", String(200), nullable=False),
    Column("month", String(50), nullable=False),
    Column("difficulty", String(50), nullable=False),
    Column("eligibility", Text, nullable=False),
    Column("description", Text, nullable=False),
    Column("registration_link", String(500)),
    *_timestamps(),
)

careers = Table(
    "careers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("career", String(200), nullable=False),
    Column("qualification", String(200), nullable=False),
    Column("stream", String(100), nullable=False),
    Column("avg_salary", String(100), nullable=False),
    Column("salary_numeric", Integer, nullable=False),
    Column("job_type", String(50), nullable=False),
    Column("demand", String(50), nullable=False),
    Column("growth_rate", String(50), nullable=False),
    Column("role_models", JSON, nullable=False),
    *_timestamps(),
)

colleges = Table(
    "colleges",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(300), nullable=False),
    Column("location", String(200), nullable=False),
    Column("district", String(100), nullable=False),
    Column("state", String(100), nullable=False, server_default="Andhra Pradesh"),
    Column("stream", String(100), nullable=False),
    Column("type", String(50), nullable=False),
    Column("rating", Float, nullable=False),
    Column("fees", String(100), nullable=False),
    Column("courses_offered", JSON, nullable=False),
    Column("contact", String(100)),
    Column("email", String(200)),
    Column("website", String(300)),
    Column("affiliation", String(200), nullable=False),
    Column("latitude", Float),
    Column("longitude", Float),
    *_timestamps(),
)

feedback = Table(
    "feedback",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(100)),
    Column("name", String(200), nullable=False),
    Column("district", String(100), nullable=False),
    Column("message", Text, nullable=False),
    Column("email", String(200), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)

user_preferences = Table(
    "user_preferences",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(100), nullable=False),
    Column("district", String(100), nullable=False),
    Column("interested_streams", JSON, nullable=False),
    Column("marks_percentage", Float),
    Column("career_goals", Text),
    *_timestamps(),
    UniqueConstraint("user_id", name="uq_user_preferences_user_id"),
)


def create_tables(engine: Engine) -> None:
    """Create any missing tables. Existing tables are left alone."""
    metadata.create_all(bind=engine)
