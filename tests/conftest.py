import os
import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

# Base SQLite pour les tests, AVANT d'importer app
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

import pytest
from datetime import datetime

from app.core.database import Base, SessionLocal, engine
from app.core.security import create_access_token
from app.main import app
from app.models.task import Task
from app.models.user import User


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """Client de test FastAPI"""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def test_user(db):
    user = User(email="metrics@example.com", username="metrics_user")
    user.set_password("testpass123")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def auth_token(test_user):
    return create_access_token(test_user.id, test_user.email)


@pytest.fixture
def auth_headers(auth_token):
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def make_task(db, test_user):
    """Insère une tâche directement en base (sans recalcul de snapshot)"""
    def _make(scheduled_date: datetime, **fields):
        values = {
            "user_id": test_user.id,
            "title": "Task",
            "scheduled_time": "09:00",
            "category": "other",
            "priority": "medium",
            "status": "pending",
            "estimated_duration": 60,
            "actual_duration": 0,
        }
        values.update(fields)
        task = Task(scheduled_date=scheduled_date, **values)
        db.add(task)
        db.commit()
        db.refresh(task)
        return task
    return _make
