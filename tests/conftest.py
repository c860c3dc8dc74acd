import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend import app
from learnhub.database import Base, get_db, init_db
from learnhub.errors import EnrichmentError
from learnhub.models import User
from learnhub.services.auth import create_tokens
from learnhub.services.enrichment import get_enrichment_gateway


class FakeGateway:
    """In-process stand-in for the Gemini gateway.

    Add an operation name to `failing` to make that call raise.
    """

    def __init__(self):
        self.failing = set()
        self.calls = []
        self.interview_feedback_document = {"overall_score": 80, "summary": "Solid answers"}

    def _call(self, name, *args):
        self.calls.append((name, args))
        if name in self.failing:
            raise EnrichmentError(f"{name} failed")

    async def structure(self, raw_input, context, tone):
        self._call("structure", raw_input, context, tone)
        return {
            "problem_statement": f"Problem behind: {raw_input[:40]}",
            "solution": "A focused product",
            "target_audience": "Students",
        }

    async def feedback(self, structured_content):
        self._call("feedback", structured_content)
        return {"overall_score": 8, "strengths": ["clear problem"]}

    async def outputs(self, structured_content, context):
        self._call("outputs", structured_content, context)
        return {"pitch_script": f"A {context} pitch", "slides": [{"title": "Intro"}]}

    async def summary(self, structured_content):
        self._call("summary", structured_content)
        return "A short summary."

    async def questions(self, configuration):
        self._call("questions", configuration)
        count = max(1, int(configuration.get("duration", 30)) // 5)
        return [
            {"id": f"q{i}", "question_text": f"Question {i} for {configuration.get('role')}?"}
            for i in range(1, count + 1)
        ]

    async def interview_feedback(self, questions, responses, configuration):
        self._call("interview_feedback", questions, responses, configuration)
        return dict(self.interview_feedback_document)

    def called(self, name):
        return [args for op, args in self.calls if op == name]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(engine, gateway):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_enrichment_gateway] = lambda: gateway
    app.state.rate_limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make_user(role="student", is_active=True, name=None):
        counter["n"] += 1
        user = User(
            name=name or f"User {counter['n']}",
            email=f"user{counter['n']}@example.com",
            hashed_password="not-used",
            role=role,
            is_active=is_active,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_tokens(user.id)['access_token']}"}


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def headers(user):
    return auth_headers(user)
