"""
Schemas module - Request/Response schemas for API endpoints.
"""
from app.schemas.schemas import (
    MessageResponse,
    ErrorResponse,
    TestimonialResponse,
    ItemResponse,
    ListResponse,
    HealthResponse,
    missing_fields,
    merge_testimonial,
)

__all__ = [
    "MessageResponse",
    "ErrorResponse",
    "TestimonialResponse",
    "ItemResponse",
    "ListResponse",
    "HealthResponse",
    "missing_fields",
    "merge_testimonial",
]
