import json
from collections.abc import Callable, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from ignitia import crud
from ignitia.api.deps import get_db
from ignitia.core import security
from ignitia.main import app
from ignitia.models import User, UserCreate

TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine) -> Generator[TestClient, None, None]:
    def override_get_db():
        with Session(engine) as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session) -> Callable[[str], User]:
    def _make_user(email: str) -> User:
        return crud.create_user(
            session=session,
            user_create=UserCreate(email=email, password=TEST_PASSWORD),
        )

    return _make_user


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {security.create_access_token(user.id)}"}

    return _auth_headers


def chat_envelope(content: str | None) -> str:
    return json.dumps(
        {
            "id": "gen-1",
            "object": "chat.completion",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
        }
    )


@pytest.fixture
def openai_stub() -> Callable[..., tuple[MagicMock, AsyncMock]]:
    """Build a fake AsyncOpenAI instance whose raw chat completion returns `body`."""

    def _stub(body: str, status_code: int = 200) -> tuple[MagicMock, AsyncMock]:
        raw = MagicMock()
        raw.http_response.text = body
        raw.http_response.status_code = status_code
        create = AsyncMock(return_value=raw)
        client = MagicMock()
        client.chat.completions.with_raw_response.create = create
        return client, create

    return _stub


@pytest.fixture
def envelope() -> Callable[[str | None], str]:
    return chat_envelope
