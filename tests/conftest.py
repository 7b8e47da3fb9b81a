# flake8: noqa
import os
import sys
from pathlib import Path

# Ensure project root is on sys.path so `kindred` can be imported when tests are run
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

PIN = "Cheerla"
os.environ["KINDRED_DELETE_PIN"] = PIN
os.environ["KINDRED_DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from kindred import models  # noqa: F401  (registers tables)
from kindred.app import app
from kindred.config import Settings, get_settings
from kindred.db import Base, get_db, make_engine


@pytest.fixture
def session_factory():
    # in-memory SQLite on a StaticPool so every session shares one database
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: Settings(delete_pin=PIN)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
