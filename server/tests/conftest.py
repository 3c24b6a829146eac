"""
Pytest configuration and fixtures for the nullresults.club backend.

Every test gets its own in-memory SQLite database wired into a fresh
application instance.
"""

from datetime import datetime, timedelta
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import Experiment, create_db_engine, create_session_factory, get_session, init_db
from main import create_app


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at an in-memory database."""
    return Settings(database_url="sqlite://", _env_file=None)


@pytest.fixture
def engine(settings):
    """Engine for the in-memory database."""
    engine = create_db_engine(settings.database_url)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory with tables created."""
    init_db(engine)
    return create_session_factory(engine)


@pytest.fixture
def app(settings, session_factory):
    """Application bound to the in-memory database."""
    return create_app(settings, session_factory)


@pytest.fixture
def client(app):
    """Test client with startup events run."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def experiment_payload() -> Dict[str, Any]:
    """A complete create request."""
    return {
        "title": "Training a GAN on 40 images",
        "summary": "Mode collapse, every single time.",
        "what_tried": "Fine-tuned StyleGAN2 on our product photos.\nBatch size 4.",
        "what_went_wrong": "The generator produced the same blurry mug for every seed.",
        "what_learned": "Forty images is not a dataset.",
        "tags": "ml, gan,, small-data",
        "author_name": "Dana",
    }


@pytest.fixture
def seed_experiments(session_factory):
    """Insert experiments with explicit, distinct creation times."""
    def _seed(count: int, start: datetime = datetime(2025, 1, 1, 12, 0, 0)):
        with get_session(session_factory) as session:
            for i in range(count):
                session.add(Experiment(
                    title=f"Experiment {i}",
                    summary=f"Summary {i}",
                    what_tried="tried",
                    what_went_wrong="went wrong",
                    what_learned="learned",
                    tags=None,
                    author_name=None,
                    created_at=start + timedelta(hours=i),
                ))
    return _seed
