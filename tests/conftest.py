import os
import tempfile
from pathlib import Path

# Settings are read at import time, so the environment must be ready first.
_DB_DIR = tempfile.mkdtemp(prefix="notes-flashcards-tests-")
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("MODE", "dev")
os.environ.setdefault(
    "DATABASE_URL", f"sqlite+aiosqlite:///{Path(_DB_DIR) / 'test.db'}"
)
os.environ.setdefault("PERPLEXITY_API_KEY", "pplx-test")
os.environ.setdefault("WORKATO_WEBHOOK_URL", "")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from pydantic_ai.messages import ModelResponse, TextPart  # noqa: E402
from pydantic_ai.models.function import FunctionModel  # noqa: E402

from app.core.db.base import Base, async_session_maker, create_all, engine  # noqa: E402
from app.core.db.schemas.auth import User  # noqa: E402
from app.modules.auth import current_active_user  # noqa: E402


@pytest.fixture
async def db():
    await create_all()
    try:
        yield
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


async def _make_user(email: str) -> User:
    async with async_session_maker() as session:
        user = User(
            email=email,
            hashed_password="not-a-real-hash",
            is_active=True,
            is_superuser=False,
            is_verified=True,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


@pytest.fixture
async def user(db):
    return await _make_user("alice@example.com")


@pytest.fixture
async def other_user(db):
    return await _make_user("bob@example.com")


@pytest.fixture
def fastapi_app():
    from main import app

    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def login_as(fastapi_app):
    def _login(u: User) -> None:
        fastapi_app.dependency_overrides[current_active_user] = lambda: u

    return _login


@pytest.fixture
async def client(fastapi_app, db):
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def reply_model():
    """Factory for a pydantic-ai model that always answers with the given text."""

    def _make(text: str) -> FunctionModel:
        def _respond(messages, info):
            return ModelResponse(parts=[TextPart(content=text)])

        return FunctionModel(_respond)

    return _make
