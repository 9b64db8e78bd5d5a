"""
Testimonial Routes

POST /testimonials - Create testimonial (multipart, optional image)
GET /testimonials - List all testimonials
GET /testimonials/{testimonial_id} - Get one testimonial
PUT /testimonials/{testimonial_id} - Partial update (multipart, optional new image)
DELETE /testimonials/{testimonial_id} - Delete testimonial and its image
"""

import logging
from typing import Optional

from bson import ObjectId
from fastapi import APIRouter, HTTPException, Depends, UploadFile, File, Form

from app.services.mongo_service import TestimonialService, get_testimonial_service
from app.utils.file_upload import UploadStore, get_upload_store, has_upload
from app.schemas.schemas import (
    TESTIMONIAL_REQUIRED_FIELDS, missing_fields, merge_testimonial,
    TestimonialResponse, ItemResponse, ListResponse, MessageResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/testimonials", tags=["Testimonials"])


def parse_testimonial_id(testimonial_id: str) -> ObjectId:
    """Path dependency - reject ids that are not valid ObjectIds with a 400."""
    if not ObjectId.is_valid(testimonial_id):
        raise HTTPException(status_code=400, detail="Invalid ID format")
    return ObjectId(testimonial_id)


@router.post("", response_model=TestimonialResponse)
async def create_testimonial(
    author: Optional[str] = Form(None),
    role: Optional[str] = Form(None),
    country: Optional[str] = Form(None),
    text: Optional[str] = Form(None),
    testimonial_type: Optional[str] = Form(None, alias="type"),
    image: Optional[UploadFile] = File(None, description="Optional photo"),
    service: TestimonialService = Depends(get_testimonial_service),
    store: UploadStore = Depends(get_upload_store)
):
    """
    Create a testimonial.

    author, role, country and text are required. The image is only written
    to disk once validation has passed.
    """
    fields = {"author": author, "role": role, "country": country, "text": text}
    if missing_fields(fields, TESTIMONIAL_REQUIRED_FIELDS):
        raise HTTPException(status_code=400, detail="All fields are required")

    try:
        image_path = await store.save(image) if has_upload(image) else None
        doc = {**fields, "image": image_path}
        if testimonial_type:
            doc["type"] = testimonial_type
        testimonial = await service.insert(doc)
    except Exception:
        logger.exception("Add testimonial error")
        raise HTTPException(status_code=500, detail="Failed to add testimonial")

    return TestimonialResponse(message="Testimonial added!", testimonial=testimonial)


@router.get("", response_model=ListResponse)
async def list_testimonials(service: TestimonialService = Depends(get_testimonial_service)):
    """All testimonials, storage order, no pagination."""
    try:
        testimonials = await service.list_all()
    except Exception:
        logger.exception("Fetch testimonials error")
        raise HTTPException(status_code=500, detail="Failed to fetch testimonials")
    return ListResponse(data=testimonials)


@router.get("/{testimonial_id}", response_model=ItemResponse)
async def get_testimonial(
    object_id: ObjectId = Depends(parse_testimonial_id),
    service: TestimonialService = Depends(get_testimonial_service)
):
    try:
        testimonial = await service.get_by_id(object_id)
    except Exception:
        logger.exception("Fetch single testimonial error")
        raise HTTPException(status_code=500, detail="Failed to fetch testimonial")

    if testimonial is None:
        raise HTTPException(status_code=404, detail="Testimonial not found")
    return ItemResponse(data=testimonial)


@router.put("/{testimonial_id}", response_model=TestimonialResponse)
async def update_testimonial(
    object_id: ObjectId = Depends(parse_testimonial_id),
    author: Optional[str] = Form(None),
    role: Optional[str] = Form(None),
    country: Optional[str] = Form(None),
    text: Optional[str] = Form(None),
    testimonial_type: Optional[str] = Form(None, alias="type"),
    image: Optional[UploadFile] = File(None, description="Optional replacement photo"),
    service: TestimonialService = Depends(get_testimonial_service),
    store: UploadStore = Depends(get_upload_store)
):
    """
    Partial update. Omitted or empty fields keep their stored value.

    A new image replaces the old one; the old file is removed best-effort
    after the document has been updated.
    """
    try:
        existing = await service.get_by_id(object_id)
    except Exception:
        logger.exception("Update error")
        raise HTTPException(status_code=500, detail="Failed to update testimonial")

    if existing is None:
        raise HTTPException(status_code=404, detail="Testimonial not found")

    updates = {
        "author": author, "role": role, "country": country,
        "text": text, "type": testimonial_type
    }
    try:
        new_image = await store.save(image) if has_upload(image) else None
        fields = merge_testimonial(existing, updates, new_image)
        changes = await service.update(object_id, fields)
    except Exception:
        logger.exception("Update error")
        raise HTTPException(status_code=500, detail="Failed to update testimonial")

    if new_image and existing.get("image"):
        await store.remove_quietly(existing["image"])

    return TestimonialResponse(
        message="Testimonial updated successfully!",
        testimonial={**existing, **changes}
    )


@router.delete("/{testimonial_id}", response_model=MessageResponse)
async def delete_testimonial(
    object_id: ObjectId = Depends(parse_testimonial_id),
    service: TestimonialService = Depends(get_testimonial_service),
    store: UploadStore = Depends(get_upload_store)
):
    """Delete a testimonial. Its image file goes first, best-effort."""
    try:
        testimonial = await service.get_by_id(object_id)
        if testimonial is None:
            raise HTTPException(status_code=404, detail="Testimonial not found")

        if testimonial.get("image"):
            await store.remove_quietly(testimonial["image"])

        await service.delete(object_id)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Delete error")
        raise HTTPException(status_code=500, detail="Failed to delete testimonial")

    return MessageResponse(message="Testimonial deleted!")
