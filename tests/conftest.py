import pytest

from assessgen.db import create_db_engine, create_session_factory, init_db
from assessgen.schemas import AssessmentRequest
from assessgen.settings import Settings
from assessgen.store import AssessmentStore


MCQ_TEXT = (
    "Here is your assessment:\n```json\n"
    '[{"question": "What is 2 + 2?", "options": ["3", "4", "5", "6"], "correctAnswer": 1},'
    ' {"question": "What is 3 x 3?", "options": ["6", "8", "9", "12"], "correctAnswer": 2}]'
    "\n```\nGood luck!"
)


class FakeGenerator:
    """Returns canned text and records every call."""

    def __init__(self, text=MCQ_TEXT):
        self.text = text
        self.calls = []

    async def generate(self, prompt, *, temperature=None, max_output_tokens=None):
        self.calls.append({"prompt": prompt, "temperature": temperature, "max_output_tokens": max_output_tokens})
        return self.text


@pytest.fixture
def request_payload():
    """Sample generate request body as a client would send it"""
    return {
        "country": "India",
        "board": "CBSE",
        "classLevel": "Class 8",
        "subject": "Mathematics",
        "topic": "Arithmetic",
        "assessmentType": "mcq",
        "difficulty": "medium",
        "questionCount": 3,
        "learningOutcomes": ["Add whole numbers", "Multiply single digits"],
    }


@pytest.fixture
def make_request(request_payload):
    def _make(**overrides):
        return AssessmentRequest.model_validate({**request_payload, **overrides})
    return _make


@pytest.fixture
def settings():
    return Settings(APP_ENV="development", DATABASE_URL="sqlite://")


@pytest.fixture
def store():
    """In-memory store with tables created"""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield AssessmentStore(create_session_factory(engine))
    engine.dispose()


@pytest.fixture
def broken_store():
    """Store whose tables were never created, so every write fails"""
    engine = create_db_engine("sqlite://")
    yield AssessmentStore(create_session_factory(engine))
    engine.dispose()


@pytest.fixture
def generator():
    return FakeGenerator()
