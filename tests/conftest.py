"""
Shared fixtures.

MongoDB and SMTP are never touched: collections and the mailer are swapped
for in-memory fakes through app.dependency_overrides, and uploads go to the
directory mounted at /uploads, emptied before every test.
"""
import copy
import os
import shutil
import tempfile
from pathlib import Path

# must be set before app.main is imported (the static mount reads it)
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="fly-uploads-"))

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.main import app
from app.core.config import get_settings
from app.services.mongo_service import (
    TestimonialService as TestimonialStore, FormSubmissionService,
    get_testimonial_service, get_employment_form_service, get_education_form_service
)
from app.services.email_service import get_email_service
from app.utils.file_upload import UploadStore, get_upload_store


class FakeInsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeDeleteResult:
    def __init__(self, deleted_count):
        self.deleted_count = deleted_count


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    async def to_list(self, length=None):
        return self.docs if length is None else self.docs[:length]


class FakeCollection:
    """The handful of async collection methods the services use."""

    def __init__(self):
        self.docs = []
        self.fail = False

    def _check(self):
        if self.fail:
            raise RuntimeError("database unavailable")

    def _find(self, query):
        for doc in self.docs:
            if all(doc.get(k) == v for k, v in query.items()):
                return doc
        return None

    async def insert_one(self, doc):
        self._check()
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return FakeInsertResult(doc["_id"])

    def find(self, query=None):
        self._check()
        return FakeCursor(copy.deepcopy(self.docs))

    async def find_one(self, query):
        self._check()
        return copy.deepcopy(self._find(query))

    async def update_one(self, query, update):
        self._check()
        doc = self._find(query)
        if doc is not None:
            doc.update(copy.deepcopy(update["$set"]))

    async def delete_one(self, query):
        self._check()
        doc = self._find(query)
        if doc is None:
            return FakeDeleteResult(0)
        self.docs.remove(doc)
        return FakeDeleteResult(1)


class FakeMailer:
    def __init__(self):
        self.sent = []
        self.fail = False

    async def send(self, subject, text, html_body):
        if self.fail:
            raise ConnectionError("smtp down")
        self.sent.append({"subject": subject, "text": text, "html": html_body})


@pytest.fixture
def testimonials():
    return FakeCollection()


@pytest.fixture
def employment_forms():
    return FakeCollection()


@pytest.fixture
def education_forms():
    return FakeCollection()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def upload_dir():
    """The directory mounted at /uploads, emptied for every test."""
    path = Path(get_settings().upload_dir)
    shutil.rmtree(path, ignore_errors=True)
    path.mkdir(parents=True)
    return path


@pytest.fixture
def client(testimonials, employment_forms, education_forms, mailer, upload_dir):
    app.dependency_overrides[get_testimonial_service] = lambda: TestimonialStore(testimonials)
    app.dependency_overrides[get_employment_form_service] = (
        lambda: FormSubmissionService("formSubmissions", employment_forms)
    )
    app.dependency_overrides[get_education_form_service] = (
        lambda: FormSubmissionService("applySubmissions", education_forms)
    )
    app.dependency_overrides[get_email_service] = lambda: mailer
    app.dependency_overrides[get_upload_store] = lambda: UploadStore(str(upload_dir))
    yield TestClient(app)
    app.dependency_overrides.clear()
