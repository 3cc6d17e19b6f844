"""Shared fixtures: every test gets its own app on a fresh SQLite file and
upload directory, so nothing leaks between tests."""
import pytest
from fastapi.testclient import TestClient

from site_backend.config import Settings
from site_backend.main import create_app
from site_backend.models.basic import Basic


TEST_SECRET = "test-secret"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{(tmp_path / 'test.db').as_posix()}",
        jwt_secret=TEST_SECRET,
        upload_dir=tmp_path / "uploads",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session(app):
    db = app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def basic_id(db_session):
    record = Basic(
        navbar_items=["Home"],
        headline="Welcome",
        logo_path="uploads/old-logo.png",
        hero_image_path="uploads/old-hero.png",
    )
    db_session.add(record)
    db_session.commit()
    return record.id
