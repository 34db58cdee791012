"""
Teacher Forms Module

Handles teacher registration submissions:
1. Public form submission with a required ID photo upload
2. Admin listing and CSV export behind a static bearer token

API Endpoints:
- POST /submit - Submit a registration
- GET /forms - List submissions (admin)
- GET /export - Download submissions as CSV (admin)
"""

from .admin_router import router as admin_router
from .router import router

__all__ = ["router", "admin_router"]
