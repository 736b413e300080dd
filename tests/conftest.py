# /tests/conftest.py

import itertools
import pytest
from typing import List, Optional
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from promptforge.db import base  # noqa: F401  (registers every model on Base)
from promptforge.db.base_class import Base
from promptforge.services.database_service import DatabaseService
from promptforge.services.ai_providers.base import ProviderAdapter, CompletionResult


class FakeProvider(ProviderAdapter):
    """A provider adapter that returns a canned completion or raises a canned error."""
    name = "fake"

    def __init__(self, text: str = "", error: Optional[Exception] = None, total_tokens: Optional[int] = None):
        self.text = text
        self.error = error
        self.total_tokens = total_tokens
        self.calls: List[dict] = []

    async def complete(self, prompt, system_prompt, model_hint=None):
        self.calls.append({"prompt": prompt, "system_prompt": system_prompt, "model_hint": model_hint})
        if self.error:
            raise self.error
        return CompletionResult(text=self.text, total_tokens=self.total_tokens)


def fake_clock(*readings: float):
    """Returns a clock that yields the given monotonic readings (in seconds) in order."""
    values = iter(readings)
    return lambda: next(values)


@pytest.fixture
def session_factory():
    """
    A sessionmaker bound to a fresh in-memory SQLite database. StaticPool keeps
    one connection alive so every session (and TestClient's worker thread)
    sees the same database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def db_service(db_session):
    return DatabaseService(db_session)


@pytest.fixture
def owner(db_service):
    return db_service.add_user({"id": "user_owner", "email": "owner@example.com", "name": "Owner"})


@pytest.fixture
def other_user(db_service):
    return db_service.add_user({"id": "user_other", "email": "other@example.com", "name": "Other"})


@pytest.fixture
def project(db_service, owner):
    return db_service.add_project({
        "id": "proj_todo",
        "user_id": owner.id,
        "name": "My Todo App!",
        "prompt": "A todo app",
    })


@pytest.fixture
def tagged_completion():
    return (
        "Here is the plan: a tiny React app.\n\n"
        '<file path="src/App.tsx" type="typescript">\nexport default function App() { return <h1>Hi</h1> }\n</file>\n\n'
        '<file path="src/index.css" type="css">\nbody { margin: 0; }\n</file>\n'
    )


@pytest.fixture
def make_generation(db_service, project, owner):
    """
    Factory that writes a generation straight through the store. `files` are
    file-row dicts and are only attached to `complete` generations.
    """
    counter = itertools.count()

    def _make(status="complete", files=None, thinking_duration=None, user_id=None):
        generation = db_service.create_generation({
            "id": f"gen_seed{next(counter)}",
            "project_id": project.id,
            "user_id": user_id or owner.id,
            "prompt": "seeded prompt",
            "model": "openrouter",
            "status": "pending",
        })
        fields = {"status": status, "thinking_duration": thinking_duration}
        if status == "complete":
            db_service.complete_generation(generation.id, files or [], fields)
        else:
            db_service.update_generation(generation.id, fields)
        return generation

    return _make


def file_row(path, content="", file_type=None):
    return {"file_path": path, "file_content": content, "file_type": file_type}
