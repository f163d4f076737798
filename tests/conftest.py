"""Shared pytest fixtures for the resume screener tests."""

import copy
import io
import random
from types import SimpleNamespace

import docx
import fitz
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app import config
from app.db import get_analyses_collection, get_users_collection
from app.main import app
from app.models import Candidate

SAMPLE_RESUME = """Jane Smith
Senior Software Engineer
Email: jane.smith@hirely.io
Phone: +1 (415) 555-0199
Location: Seattle, WA

SUMMARY
Backend engineer focused on Python services and cloud infrastructure.

EXPERIENCE
Software Engineer | Acme Corp | 2018 - 2024
6 years of experience building APIs
Developed payment APIs with Python and Docker
Built a Kubernetes deployment platform

EDUCATION
Master of Science in Computer Science

CERTIFICATIONS
AWS Certified Solutions Architect
"""

SAMPLE_JOB_DESCRIPTION = (
    "We are hiring a senior engineer. Must have react and required python. "
    "Nice to have docker. Remote, full-time role. Bachelor degree preferred."
)


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, key, direction=1):
        self._docs = sorted(self._docs, key=lambda d: d[key], reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    """In-memory double for a Motor collection, covering the queries the app issues."""

    def __init__(self):
        self.docs = []

    @staticmethod
    def _matches(doc, query):
        return all(doc.get(k) == v for k, v in query.items())

    async def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, query):
        for doc in self.docs:
            if self._matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query):
        return FakeCursor([copy.deepcopy(d) for d in self.docs if self._matches(d, query)])

    async def update_one(self, query, update):
        for doc in self.docs:
            if self._matches(doc, query):
                doc.update(update.get("$set", {}))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, query):
        for i, doc in enumerate(self.docs):
            if self._matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(config, "BCRYPT_ROUNDS", 4)


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(7)


@pytest.fixture()
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture()
def sample_job_description() -> str:
    return SAMPLE_JOB_DESCRIPTION


@pytest.fixture()
def pdf_bytes() -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Jane Smith\nPython developer with 5 years of experience")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture()
def docx_bytes() -> bytes:
    document = docx.Document()
    for line in SAMPLE_RESUME.splitlines():
        document.add_paragraph(line)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def users_col() -> FakeCollection:
    return FakeCollection()


@pytest.fixture()
def analyses_col() -> FakeCollection:
    return FakeCollection()


@pytest.fixture()
def make_client(users_col, analyses_col):
    """Build TestClients that share one in-memory database; each keeps its own cookies."""
    app.dependency_overrides[get_users_collection] = lambda: users_col
    app.dependency_overrides[get_analyses_collection] = lambda: analyses_col
    clients = []

    def _make():
        client = TestClient(app, raise_server_exceptions=False)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
    app.dependency_overrides.clear()


@pytest.fixture()
def client(make_client):
    return make_client()


def make_candidate(score: int, index: int = 0) -> Candidate:
    return Candidate(
        id=f"candidate-{index}",
        name="Sarah Johnson",
        email="sarah.johnson@email.com",
        phone="+1 (555) 123-4567",
        match_score=score,
        file_name=f"resume-{index}.pdf",
        experience="3-5 years",
        skills=["python"],
        education="Bachelor's in Computer Science",
        location="Austin, TX",
        summary="Backend developer.",
        status="failed",
    )


@pytest.fixture()
def candidate_factory():
    return make_candidate
