import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quizapp.auth_util import create_access_token
from quizapp.database import get_db
from quizapp.database.base_class import Base
from quizapp.main import app
from quizapp.model import Quiz, Result  # noqa: F401  registers the tables


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def server_client(session_factory):
    """Client that returns 500 responses instead of re-raising server errors."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user_id="user-1"):
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}
    return _headers


@pytest.fixture
def quiz_payload():
    return {
        "title": "Python Basics",
        "technology": "python",
        "level": "basic",
        "questions": [
            {
                "question": "Which keyword defines a function?",
                "options": ["def", "func", "lambda", "fn"],
                "correctAnswer": "def",
                "explanation": "Functions are defined with def.",
            },
            {
                "question": "What does len([1, 2]) return?",
                "options": ["1", "2", "3"],
                "correctAnswer": "2",
                "explanation": "The list has two items.",
            },
        ],
    }


@pytest.fixture
def create_quiz(client, quiz_payload):
    """Create a quiz through the API and return its JSON body."""
    def _create(**overrides):
        payload = {**quiz_payload, **overrides}
        response = client.post("/api/quiz", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["quiz"]
    return _create
