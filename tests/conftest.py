"""Shared fixtures for the marketplace engine test-suite."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ.setdefault("STORE_RETRY_INITIAL_DELAY", "0.01")

from app.infrastructure import database  # noqa: E402


def build_page_snapshot(*component_types: str) -> dict:
    """Build a page whose root container holds one node per component type."""

    snapshot: dict = {
        "ROOT": {
            "type": {"resolvedName": "Container"},
            "nodes": [],
            "props": {},
        }
    }
    for index, component_type in enumerate(component_types):
        node_id = f"node-{index}"
        snapshot["ROOT"]["nodes"].append(node_id)
        snapshot[node_id] = {
            "type": {"resolvedName": component_type},
            "nodes": [],
            "parent": "ROOT",
            "props": {},
        }
    return snapshot


@pytest.fixture()
def page_snapshot():
    return build_page_snapshot


@pytest.fixture(autouse=True)
def fresh_database():
    """Recreate every table so each test starts from an empty store."""

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    yield
    database.engine.dispose()


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def session_factory():
    """Open independent sessions, e.g. one per worker thread."""

    opened = []

    def _open():
        db = database.SessionLocal()
        opened.append(db)
        return db

    yield _open
    for db in opened:
        db.close()


@pytest.fixture()
def make_template(session):
    """Submit a template and optionally approve it and set its counters."""

    from app.application.use_cases.templates import moderate_template, submit_template
    from app.infrastructure.repositories import TemplateRepository

    counter = {"value": 0}

    def _make(
        *,
        name: str | None = None,
        category: str = "landing",
        tags: tuple[str, ...] = (),
        content: dict | None = None,
        approve: bool = True,
        downloads: int = 0,
        template_type: str = "free",
        price: str | None = None,
        created_by: str = "creator-1",
    ):
        counter["value"] += 1
        template = submit_template(
            session,
            name=name or f"Template {counter['value']}",
            category=category,
            content=content or build_page_snapshot("Text"),
            created_by=created_by,
            tags=tags,
            template_type=template_type,
            price=price,
        )
        if approve:
            template = moderate_template(
                session,
                template_id=template.id,
                status="approved",
                moderator_id="moderator-1",
            )
        if downloads:
            TemplateRepository(session).increment_counters(
                template.id, download_count=downloads
            )
            session.commit()
        return template

    return _make


@pytest.fixture()
def client():
    """Return a test client bound to a clean application instance."""

    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
