# tests/conftest.py
"""Pytest configuration and fixtures"""
import os
import sys
import tempfile
from pathlib import Path

# Configuration is read at import time, so point it somewhere disposable first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="dispatch-uploads-"))

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient

from roadside_dispatch.database import make_engine, make_session_factory
from roadside_dispatch.main import app
from roadside_dispatch.store import DispatchStore, get_store


@pytest.fixture
def session_factory(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'dispatch.db'}")
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    """Store seeded with 3 contacts, 3 users and 2 admins"""
    store = DispatchStore(session_factory, strict_load=False)
    store.initialize()
    return store


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
