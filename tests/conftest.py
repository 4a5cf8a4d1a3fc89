"""Pytest configuration and fixtures."""

import os
import tempfile

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("FILE_STORAGE_DIR", tempfile.mkdtemp(prefix="arc-hives-files-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import arc_hives.models  # noqa: F401
from arc_hives.database import Base, get_db
from arc_hives.dependencies import get_file_storage
from arc_hives.main import app
from arc_hives.models import Article, Member
from arc_hives.services.file_storage import FileStorage
from arc_hives.services.fingerprint import fingerprint
from arc_hives.services.store import ArticleStore

BASE_URL = "http://testserver/files"


@pytest.fixture(scope="function")
def session_factory():
    """Fresh in-memory SQLite database shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)

    engine.dispose()


@pytest.fixture(scope="function")
def test_db(session_factory):
    """Create a test database session for each test."""
    db = session_factory()

    yield db

    db.close()


@pytest.fixture
def file_storage(tmp_path):
    return FileStorage(str(tmp_path), BASE_URL)


@pytest.fixture
def store(test_db, file_storage):
    return ArticleStore(test_db, file_storage)


@pytest.fixture
def make_article(test_db):
    """Insert an article directly, bypassing the publication flow."""

    def _make(title="A", content="hello", **kwargs):
        article = Article(
            title=title,
            content=content,
            fingerprint=fingerprint(content),
            bibliography=[],
            **kwargs,
        )
        test_db.add(article)
        test_db.commit()
        test_db.refresh(article)
        return article

    return _make


@pytest.fixture
def make_member(test_db):
    def _make(points=0.0, name="member"):
        member = Member(name=name, points=points)
        test_db.add(member)
        test_db.commit()
        test_db.refresh(member)
        return member

    return _make


@pytest.fixture
def client(session_factory, file_storage):
    """API client whose requests hit the test database and storage."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = lambda: file_storage

    yield TestClient(app)

    app.dependency_overrides.clear()
