"""Shared pytest fixtures.

Every test runs against a fresh in-memory SQLite database, and no
text-generation provider is configured unless a test injects one.
"""

import os

# Must be set before config/core.database are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DEFAULT_LLM_PROVIDER"] = "groq"
os.environ["GROQ_API_KEY"] = ""
os.environ["JWT_SECRET_KEY"] = "test-secret"

from typing import Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from core.database import SessionLocal, engine
from models.base import Base
from schemas.user import User
from utils import user_manager as user_manager_module
from utils.user_manager import UserManager

# Fast hashes for tests
user_manager_module.BCRYPT_ROUNDS = 4


@pytest.fixture(autouse=True)
def reset_database() -> Generator[None, None, None]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db: Session):
    """Factory creating users, optionally with skills."""
    manager = UserManager(db)
    counter = {"n": 0}

    def _make(
        role: str = "student",
        name: Optional[str] = None,
        skills: Optional[List[str]] = None,
        availability: Optional[str] = None,
    ) -> User:
        counter["n"] += 1
        name = name or f"{role}{counter['n']}"
        user = manager.create_user(
            name=name,
            email=f"{name.lower().replace(' ', '.')}{counter['n']}@example.com",
            password="secret123",
            role=role,
        )
        if skills is not None or availability is not None:
            user = manager.update_profile(
                user.user_id, skills=skills, availability=availability
            )
        return user

    return _make


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    from app import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    from api.routes.auth import create_access_token

    def _headers(user: User) -> dict:
        token = create_access_token({"sub": user.user_id, "role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return _headers
