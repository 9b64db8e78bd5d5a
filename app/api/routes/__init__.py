"""
API Routes - Combines route modules.

api_router is mounted under /api; form_router stays at the root because the
existing frontend posts to /send-form and friends.
"""

from fastapi import APIRouter

from app.api.routes.testimonial_routes import router as testimonial_router
from app.api.routes.form_routes import router as form_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(testimonial_router)

__all__ = ["api_router", "form_router"]
