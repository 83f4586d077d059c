"""
Schemas module - Request/Response schemas for API endpoints.

All schemas live in schemas.py:
- Request schemas (what API accepts)
- Response schemas (what API returns)
"""
