"""
Pydantic Schemas - Request/Response Validation

All API response envelopes in one file for simplicity, plus the small
helpers that decide what a valid submission / testimonial update is.

Form submissions are free-form JSON objects, so requests are taken as plain
dicts and only the required keys are checked here.
"""

from pydantic import BaseModel
from typing import Optional, List, Any, Dict, Iterable


# ============================================================
# REQUIRED FIELDS
# ============================================================

TESTIMONIAL_REQUIRED_FIELDS = ("author", "role", "country", "text")
TESTIMONIAL_UPDATABLE_FIELDS = ("author", "role", "country", "text", "type")
DEFAULT_TESTIMONIAL_TYPE = "Employment"

EMPLOYMENT_REQUIRED_FIELDS = ("name", "email", "mobile")
EDUCATION_REQUIRED_FIELDS = ("name", "email", "phone")


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def missing_fields(data: Dict[str, Any], required: Iterable[str]) -> List[str]:
    """Required keys that are absent, null or empty."""
    return [field for field in required if is_blank(data.get(field))]


def merge_testimonial(
    existing: Dict[str, Any],
    updates: Dict[str, Any],
    image: Optional[str] = None
) -> Dict[str, Any]:
    """
    Field-level merge for a partial testimonial update.

    A request value wins when present and non-empty, otherwise the stored
    value is kept. type falls back to "Employment" when neither has one.
    Returns only the fields to $set (no _id, no timestamps).
    """
    merged = {}
    for field in TESTIMONIAL_UPDATABLE_FIELDS:
        value = updates.get(field)
        merged[field] = value if not is_blank(value) else existing.get(field)
    if is_blank(merged["type"]):
        merged["type"] = DEFAULT_TESTIMONIAL_TYPE
    merged["image"] = image or existing.get("image")
    return merged


# ============================================================
# RESPONSE SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    error: str
    success: bool = False

class TestimonialResponse(BaseModel):
    message: str
    testimonial: Dict[str, Any]
    success: bool = True

class ItemResponse(BaseModel):
    data: Dict[str, Any]
    success: bool = True

class ListResponse(BaseModel):
    data: List[Dict[str, Any]]
    success: bool = True

class HealthResponse(BaseModel):
    status: str
    mongodb: str
