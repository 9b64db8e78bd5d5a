"""
MongoDB Service - CRUD operations for document collections.

Collections in this database:
1. formSubmissions  - Employment form submissions (write once, list)
2. applySubmissions - Education form submissions (write once, list)
3. testimonials     - Testimonials with optional image (full CRUD)

Documents are plain dicts. Only the handlers know which keys are required;
everything else a client sends is stored verbatim.
"""

from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from bson import ObjectId
from pymongo.asynchronous.collection import AsyncCollection

from app.db.mongodb import get_collection, COLLECTIONS


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================
# TESTIMONIALS COLLECTION
# ============================================================

class TestimonialService:
    """
    Handles testimonial storage.
    createdAt / updatedAt are always set here, never taken from the client.
    """

    def __init__(self, collection: AsyncCollection = None):
        if collection is None:
            collection = get_collection(COLLECTIONS["testimonials"])
        self.collection = collection

    async def insert(self, testimonial: Dict[str, Any]) -> dict:
        """
        Insert a new testimonial.

        Returns the stored document including its _id (as string) and createdAt.
        """
        doc = dict(testimonial)
        doc["createdAt"] = utcnow()
        await self.collection.insert_one(doc)
        return serialize_doc(doc)

    async def list_all(self) -> List[dict]:
        """All testimonials in storage order."""
        docs = await self.collection.find().to_list(length=None)
        return serialize_docs(docs)

    async def get_by_id(self, testimonial_id: ObjectId) -> Optional[dict]:
        doc = await self.collection.find_one({"_id": testimonial_id})
        return serialize_doc(doc)

    async def update(self, testimonial_id: ObjectId, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Apply a $set with the given fields plus a fresh updatedAt. Returns what was set."""
        changes = dict(fields)
        changes["updatedAt"] = utcnow()
        await self.collection.update_one({"_id": testimonial_id}, {"$set": changes})
        return changes

    async def delete(self, testimonial_id: ObjectId) -> bool:
        result = await self.collection.delete_one({"_id": testimonial_id})
        return result.deleted_count > 0


# ============================================================
# FORM SUBMISSION COLLECTIONS
# Employment and education forms share the same behaviour,
# only the collection differs.
# ============================================================

class FormSubmissionService:
    """Stores immutable form submissions."""

    def __init__(self, collection_name: str, collection: AsyncCollection = None):
        if collection is None:
            collection = get_collection(collection_name)
        self.collection_name = collection_name
        self.collection = collection

    async def insert(self, form: Dict[str, Any]) -> str:
        """
        Persist the submitted document unmodified.

        Note: like pymongo's insert_one, the passed dict gains an _id key.
        """
        result = await self.collection.insert_one(form)
        return str(result.inserted_id)

    async def list_all(self) -> List[dict]:
        docs = await self.collection.find().to_list(length=None)
        return serialize_docs(docs)


# ============================================================
# FASTAPI DEPENDENCIES
# ============================================================

def get_testimonial_service() -> TestimonialService:
    return TestimonialService()


def get_employment_form_service() -> FormSubmissionService:
    return FormSubmissionService(COLLECTIONS["employment_forms"])


def get_education_form_service() -> FormSubmissionService:
    return FormSubmissionService(COLLECTIONS["education_forms"])
