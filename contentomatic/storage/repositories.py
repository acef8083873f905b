"""Repository pattern implementation for data access layer."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from contentomatic.models.content import ContentDocument
from contentomatic.models.page import Page
from contentomatic.storage.serializers import serialize_model


class PageRepository:
    """Repository for page operations."""

    def __init__(self, session: Session):
        """Initialize repository with a database session."""
        self.session = session

    def create(self, page: Page) -> Page:
        """Create a new page."""
        self.session.add(page)
        self.session.flush()
        return page

    def get_by_id(self, page_id: str) -> Optional[Page]:
        """Get page by ID."""
        return self.session.get(Page, page_id)

    def get_all(self, limit: int = 100, offset: int = 0) -> list[Page]:
        """Get all pages with pagination."""
        stmt = (
            select(Page)
            .order_by(Page.created_at.desc(), Page.id)
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.scalars(stmt))

    def count(self) -> int:
        """Count pages."""
        return self.session.scalar(select(func.count(Page.id))) or 0

    def update(self, page: Page) -> Page:
        """Update an existing page."""
        self.session.flush()
        return page

    def delete(self, page_id: str) -> bool:
        """Delete a page by ID."""
        page = self.get_by_id(page_id)
        if page:
            self.session.delete(page)
            return True
        return False


class ContentDocumentRepository:
    """Repository for persisted content documents."""

    def __init__(self, session: Session):
        """Initialize repository with a database session."""
        self.session = session

    def create(self, content: ContentDocument) -> ContentDocument:
        """Create a new content document."""
        self.session.add(content)
        self.session.flush()
        return content

    def get_by_page_id(self, page_id: str) -> Optional[ContentDocument]:
        """Get the content document owned by a page."""
        stmt = select(ContentDocument).where(ContentDocument.page_id == page_id)
        return self.session.scalar(stmt)

    def update(self, content: ContentDocument) -> ContentDocument:
        """Update an existing content document."""
        self.session.flush()
        return content


class BlockRecordRepository:
    """Repository for the records of one block path (images, page references, ...)."""

    def __init__(self, session: Session, model: type):
        """
        Initialize repository with a database session.

        Args:
            session: SQLAlchemy database session
            model: Record model with ``id`` and ``content_id`` columns
        """
        self.session = session
        self.model = model

    def create(self, record: Any) -> Any:
        """Create a new record."""
        self.session.add(record)
        self.session.flush()
        return record

    def get_by_id(self, record_id: str) -> Optional[Any]:
        """Get record by ID."""
        return self.session.get(self.model, record_id)

    def get_by_content_id(self, content_id: str) -> list[Any]:
        """Get all records attached to a content document."""
        stmt = (
            select(self.model)
            .where(self.model.content_id == content_id)
            .order_by(self.model.created_at)
        )
        return list(self.session.scalars(stmt))

    def attach(self, record: Any, content_id: str) -> Any:
        """Attach a record to a content document."""
        record.content_id = content_id
        self.session.flush()
        return record

    def detach(self, record: Any) -> Any:
        """Detach a record from its content document."""
        record.content_id = None
        self.session.flush()
        return record

    def detach_all(self, content_id: str) -> int:
        """
        Detach every record attached to a content document.

        Returns:
            Number of detached records
        """
        stmt = (
            update(self.model)
            .where(self.model.content_id == content_id)
            .values(content_id=None)
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        self.session.flush()
        return result.rowcount or 0

    def delete_detached(self, record_ids: Iterable[str]) -> int:
        """
        Delete those of the given records that are not attached to any content.

        Returns:
            Number of deleted records
        """
        record_ids = list(record_ids)
        if not record_ids:
            return 0
        stmt = (
            delete(self.model)
            .where(self.model.id.in_(record_ids), self.model.content_id.is_(None))
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        self.session.flush()
        return result.rowcount or 0


class ContentRecordRepository:
    """Fetches the block records of a content document, keyed by block path."""

    def __init__(self, session: Session, blocks: Mapping[str, Any] | Iterable[Any]):
        """
        Initialize repository with a database session and block handlers.

        Args:
            session: SQLAlchemy database session
            blocks: Block handlers keyed by type, or an iterable of handlers
        """
        self.session = session
        if isinstance(blocks, Mapping):
            blocks = blocks.values()
        self.blocks = [block for block in blocks if block.path and block.record_model is not None]

    def for_path(self, path: str) -> BlockRecordRepository:
        """Get the record repository of a block path."""
        for block in self.blocks:
            if block.path == path:
                return BlockRecordRepository(self.session, block.record_model)
        raise KeyError(path)

    def fetch_records(self, content_id: str) -> dict[str, list[dict[str, Any]]]:
        """
        Fetch every block record attached to a content document.

        Returns:
            Serialized records keyed by block path
        """
        records: dict[str, list[dict[str, Any]]] = {}
        for block in self.blocks:
            if block.path in records:
                continue
            repo = BlockRecordRepository(self.session, block.record_model)
            records[block.path] = [
                serialize_model(record, include=block.record_includes)
                for record in repo.get_by_content_id(content_id)
            ]
        return records
