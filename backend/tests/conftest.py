"""
Task Evaluator Backend — Test Configuration (conftest.py)
==========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment variables are set BEFORE any taskeval import so the
       settings singleton and the module-level engine pick them up.

Fixture Hierarchy:
    ├── fake_generator:   Scripted TextGenerator (no Gemini calls)
    ├── fake_ocr:         OCRService double with a canned result
    ├── mock_db_session:  Mock AsyncSession for service unit tests
    ├── db_engine:        Real SQLite (aiosqlite) engine with tables created
    ├── db_sessionmaker:  Session factory bound to db_engine
    └── test_client:      HTTPX AsyncClient wired to the app with overrides
"""

import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="taskeval_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/app.db"
os.environ["GEMINI_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import List, Optional, Union  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taskeval.database import Base, get_db_session  # noqa: E402
from taskeval.dependencies import get_ocr_service, get_text_generator  # noqa: E402
from taskeval.services.llm_base import TextGenerator  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Test Doubles
# ══════════════════════════════════════════════════════════════════════════


class FakeGenerator(TextGenerator):
    """
    TextGenerator that records prompts and replays a scripted outcome.

    `reply` is returned from every call; if it is an exception instance it is
    raised instead.
    """

    def __init__(self, reply: Union[str, Exception] = "", healthy: bool = True):
        self.reply = reply
        self.healthy = healthy
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply

    async def health_check(self) -> bool:
        return self.healthy


class FakeOCR:
    """Stand-in for OCRService; records every call."""

    def __init__(self, text: str = "", error: Optional[Exception] = None, healthy: bool = True):
        self.text = text
        self.error = error
        self.healthy = healthy
        self.validated: List[bytes] = []
        self.extracted: List[bytes] = []

    def validate_image(self, content: bytes) -> None:
        self.validated.append(content)

    async def extract_text(self, content: bytes) -> str:
        self.extracted.append(content)
        if self.error is not None:
            raise self.error
        return self.text

    async def health_check(self) -> bool:
        return self.healthy


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def fake_ocr():
    return FakeOCR()


@pytest.fixture
def mock_db_session():
    """
    Mock async database session.

    Usage:
        mock_db_session.flush.side_effect = RuntimeError("disk full")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """SQLite engine in a per-test file with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def db_sessionmaker(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_client(fake_generator, fake_ocr, db_sessionmaker):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Gemini, OCR and the database session are replaced with the fixtures
    above; tests tweak `fake_generator` / `fake_ocr` before making requests.
    """
    from taskeval.main import app

    async def override_db_session():
        async with db_sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_text_generator] = lambda: fake_generator
    app.dependency_overrides[get_ocr_service] = lambda: fake_ocr
    app.dependency_overrides[get_db_session] = override_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
