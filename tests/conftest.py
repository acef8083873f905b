"""Shared pytest fixtures and test utilities for Content-O-Matic tests."""

import os
import tempfile
from typing import Any, Generator

import pytest

from contentomatic.blocks import BlockRegistry, ImageBlock, PageReferenceBlock
from contentomatic.services.content_service import ContentService
from contentomatic.services.page_service import PageService
from contentomatic.storage.database import Database, reset_db


def block(block_type: str, data: dict[str, Any] | None = None, nodes: list | None = None) -> dict[str, Any]:
    """Build the JSON form of a block node."""
    return {"object": "block", "type": block_type, "data": data or {}, "nodes": nodes or []}


def text(value: str, marks: list[str] | None = None) -> dict[str, Any]:
    """Build the JSON form of a text node."""
    return {
        "object": "text",
        "text": value,
        "marks": [{"object": "mark", "type": mark, "data": {}} for mark in marks or []],
    }


def paragraph(value: str) -> dict[str, Any]:
    return block("paragraph", nodes=[text(value)])


@pytest.fixture(scope="function")
def temp_db() -> Generator[Database, None, None]:
    """
    Create a temporary SQLite database for testing.

    Yields:
        Database instance with tables created
    """
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    reset_db()

    database = Database(f"sqlite:///{db_path}")
    database.create_tables()

    yield database

    # Cleanup
    database.drop_tables()
    database.engine.dispose()
    reset_db()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def db_session(temp_db):
    """Get a database session from temp_db."""
    with temp_db.session() as session:
        yield session


@pytest.fixture
def registry() -> BlockRegistry:
    """Registry with the image and page reference blocks plus defaults."""
    return BlockRegistry.from_config([ImageBlock, PageReferenceBlock])


@pytest.fixture
def page_service(db_session):
    """Create a page service instance."""
    return PageService(db_session)


@pytest.fixture
def content_service(db_session, registry):
    """Create a content service instance."""
    return ContentService(db_session, registry)


@pytest.fixture
def sample_page(page_service):
    """Create a sample page for testing."""
    return page_service.create_page(title="Sample Page", metadata={"author": "test"})
