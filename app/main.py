"""
Fly Ambition API - Main Application

FastAPI backend with:
- MongoDB for form submissions and testimonials
- Local-disk image uploads served from /uploads
- Email notification for every form submission

Run: uvicorn app.main:app --reload
 or: python -m app.main
"""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import api_router, form_router
from app.core.config import get_settings
from app.core.log import configure_logging
from app.db.mongodb import ping_mongo, close_mongo_client
from app.schemas.schemas import ErrorResponse, HealthResponse
from app.utils.file_upload import UPLOAD_URL_PREFIX

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Ensure uploads folder exists before mounting it
os.makedirs(settings.upload_dir, exist_ok=True)

# Create FastAPI app
app = FastAPI(
    title="Fly Ambition API",
    description="""
    Backend for the Fly Ambition site.

    ## Features
    - **Employment form**: saved to MongoDB and emailed to the team
    - **Education form**: saved to MongoDB and emailed to the team
    - **Testimonials**: full CRUD with optional image upload
    """,
    version="1.0.0",
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (the public site posts from another origin)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Every error leaves as {"success": false, "error": "..."}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Invalid request body").model_dump()
    )


# Include routes
app.include_router(api_router, prefix="/api")
app.include_router(form_router)

# Uploaded testimonial images
app.mount(f"/{UPLOAD_URL_PREFIX}", StaticFiles(directory=settings.upload_dir), name="uploads")


@app.on_event("startup")
async def startup_event():
    """Check MongoDB on startup. The API keeps running if it is down."""
    if await ping_mongo():
        logger.info("✅ MongoDB connected")
    else:
        logger.error("MongoDB connection failed, requests needing the database will fail")


@app.on_event("shutdown")
async def shutdown_event():
    await close_mongo_client()


@app.get("/", response_class=PlainTextResponse, tags=["Health"])
async def root():
    return "Server is running 🚀"


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Liveness plus a MongoDB ping."""
    return HealthResponse(
        status="healthy",
        mongodb="connected" if await ping_mongo() else "disconnected"
    )


if __name__ == "__main__":
    import uvicorn

    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
