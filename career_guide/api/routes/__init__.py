"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from career_guide.api.routes.stream_routes import router as stream_router
from career_guide.api.routes.career_routes import router as career_router
from career_guide.api.routes.college_routes import router as college_router
from career_guide.api.routes.course_routes import router as course_router
from career_guide.api.routes.feedback_routes import router as feedback_router
from career_guide.api.routes.preference_routes import router as preference_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(stream_router)
api_router.include_router(career_router)
api_router.include_router(college_router)
api_router.include_router(course_router)
api_router.include_router(feedback_router)
api_router.include_router(preference_router)
