"""
API module - FastAPI routers plus the helpers they share
(query-string parsing, write validation, cached responses).

Usage:
    from career_guide.api.routes import api_router
    app.include_router(api_router)
"""
