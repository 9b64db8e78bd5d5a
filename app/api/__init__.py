"""
API module - FastAPI routers and endpoint definitions.

Usage:
    from app.api.routes import api_router, form_router
    app.include_router(api_router, prefix="/api")
    app.include_router(form_router)
"""
