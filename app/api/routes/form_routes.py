"""
Form Submission Routes

POST /send-form - Employment form (saved to formSubmissions + email)
GET /submissions - List employment submissions
POST /send-education-form - Education form (saved to applySubmissions + email)
GET /apply-education - List education submissions

Bodies are free-form JSON objects. Only the required keys are checked, the
rest is stored as sent. If the email fails after the document was saved the
client still gets a 500; the document is not rolled back.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Tuple

from fastapi import APIRouter, HTTPException, Depends, Body

from app.services.mongo_service import (
    FormSubmissionService, get_employment_form_service, get_education_form_service
)
from app.services.email_service import (
    EmailService, get_email_service, employment_form_email, education_form_email
)
from app.schemas.schemas import (
    EMPLOYMENT_REQUIRED_FIELDS, EDUCATION_REQUIRED_FIELDS, missing_fields,
    MessageResponse, ListResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Forms"])


async def process_submission(
    form: Dict[str, Any],
    required: Iterable[str],
    service: FormSubmissionService,
    mailer: EmailService,
    build_email: Callable[[Dict[str, Any]], Tuple[str, str, str]]
) -> MessageResponse:
    """Validate, save, then notify."""
    if missing_fields(form, required):
        raise HTTPException(status_code=400, detail="Required fields missing")

    try:
        submission_id = await service.insert(form)
        logger.info("Saved submission %s to %s", submission_id, service.collection_name)
        subject, text, html_body = build_email(form)
        await mailer.send(subject, text, html_body)
    except Exception:
        logger.exception("Error processing %s submission", service.collection_name)
        raise HTTPException(status_code=500, detail="Failed to process form")

    return MessageResponse(message="Form saved & email sent")


async def list_submissions(service: FormSubmissionService) -> ListResponse:
    try:
        submissions = await service.list_all()
    except Exception:
        logger.exception("Error fetching submissions from %s", service.collection_name)
        raise HTTPException(status_code=500, detail="Failed to fetch submissions")
    return ListResponse(data=submissions)


@router.post("/send-form", response_model=MessageResponse)
async def send_employment_form(
    form: Dict[str, Any] = Body(...),
    service: FormSubmissionService = Depends(get_employment_form_service),
    mailer: EmailService = Depends(get_email_service)
):
    """Employment form. Requires name, email and mobile."""
    return await process_submission(
        form, EMPLOYMENT_REQUIRED_FIELDS, service, mailer, employment_form_email
    )


@router.get("/submissions", response_model=ListResponse)
async def get_employment_submissions(
    service: FormSubmissionService = Depends(get_employment_form_service)
):
    return await list_submissions(service)


@router.post("/send-education-form", response_model=MessageResponse)
async def send_education_form(
    form: Dict[str, Any] = Body(...),
    service: FormSubmissionService = Depends(get_education_form_service),
    mailer: EmailService = Depends(get_email_service)
):
    """Education form. Requires name, email and phone."""
    return await process_submission(
        form, EDUCATION_REQUIRED_FIELDS, service, mailer, education_form_email
    )


@router.get("/apply-education", response_model=ListResponse)
async def get_education_submissions(
    service: FormSubmissionService = Depends(get_education_form_service)
):
    return await list_submissions(service)
