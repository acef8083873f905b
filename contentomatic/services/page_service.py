"""Page service layer for business logic and validation."""

import uuid
from typing import Any

from sqlalchemy.orm import Session

from contentomatic.exceptions import (
    DatabaseError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from contentomatic.models.page import Page
from contentomatic.storage.repositories import PageRepository


class PageService:
    """Service layer for page CRUD operations with validation and error handling."""

    # Validation constants
    TITLE_MAX_LENGTH = 500
    ID_MAX_LENGTH = 255

    def __init__(self, session: Session):
        """
        Initialize page service with database session.

        Args:
            session: SQLAlchemy database session
        """
        self.session = session
        self.page_repo = PageRepository(session)

    def create_page(
        self,
        title: str,
        metadata: dict[str, Any] | None = None,
        page_id: str | None = None,
    ) -> Page:
        """
        Create a new page.

        Args:
            title: Page title (required, non-empty)
            metadata: Optional page metadata (JSON structure)
            page_id: Optional page ID. If not provided, generates a UUID.

        Returns:
            Created page with ID

        Raises:
            ValidationError: If title or metadata is invalid
            DuplicateError: If page with same ID already exists
            DatabaseError: If database operation fails
        """
        self._validate_title(title)

        if metadata is not None:
            self._validate_metadata(metadata)

        if page_id is None:
            page_id = str(uuid.uuid4())
        else:
            self.validate_id(page_id)

        if self.page_repo.get_by_id(page_id) is not None:
            raise DuplicateError("Page", "id", page_id)

        try:
            page = Page(id=page_id, title=title, meta=metadata or {})
            self.page_repo.create(page)
            self.session.commit()
            return page

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to create page: {str(e)}", e) from e

    def get_page(self, page_id: str) -> Page:
        """
        Get page by ID.

        Raises:
            ValidationError: If page_id is invalid
            NotFoundError: If page is not found
            DatabaseError: If database operation fails
        """
        self.validate_id(page_id)

        try:
            page = self.page_repo.get_by_id(page_id)
        except Exception as e:
            raise DatabaseError(f"Failed to get page: {str(e)}", e) from e

        if page is None:
            raise NotFoundError("Page", page_id)
        return page

    def update_page(
        self,
        page_id: str,
        title: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Page:
        """
        Update page title and/or metadata.

        Args:
            page_id: Page ID
            title: New title (optional)
            metadata: New metadata (optional, replaces existing)

        Returns:
            Updated page

        Raises:
            ValidationError: If page_id, title, or metadata is invalid
            NotFoundError: If page is not found
            DatabaseError: If database operation fails
        """
        if title is not None:
            self._validate_title(title)
        if metadata is not None:
            self._validate_metadata(metadata)

        page = self.get_page(page_id)

        try:
            if title is not None:
                page.title = title
            if metadata is not None:
                page.meta = metadata

            self.page_repo.update(page)
            self.session.commit()
            return page

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to update page: {str(e)}", e) from e

    def delete_page(self, page_id: str) -> bool:
        """
        Delete a page and its content document.

        Records of the page's blocks are kept but detached.

        Returns:
            True if page was deleted, False if not found

        Raises:
            ValidationError: If page_id is invalid
            DatabaseError: If database operation fails
        """
        self.validate_id(page_id)

        try:
            deleted = self.page_repo.delete(page_id)
            if deleted:
                self.session.commit()
            return deleted

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to delete page: {str(e)}", e) from e

    def list_pages(self, limit: int = 100, offset: int = 0) -> list[dict[str, Any]]:
        """
        List pages with pagination, newest first.

        Returns:
            List of page summaries with:
            - id: Page ID
            - title: Page title
            - has_content: Whether the page has a saved content document
            - updated_at: Last update timestamp

        Raises:
            ValidationError: If limit or offset is invalid
            DatabaseError: If database operation fails
        """
        if limit < 0:
            raise ValidationError("limit must be non-negative", "limit")
        if offset < 0:
            raise ValidationError("offset must be non-negative", "offset")

        try:
            pages = self.page_repo.get_all(limit=limit, offset=offset)
            return [
                {
                    "id": page.id,
                    "title": page.title,
                    "has_content": page.content is not None,
                    "updated_at": page.updated_at.isoformat() if page.updated_at else None,
                }
                for page in pages
            ]
        except Exception as e:
            raise DatabaseError(f"Failed to list pages: {str(e)}", e) from e

    def count_pages(self) -> int:
        """Count all pages."""
        return self.page_repo.count()

    def _validate_title(self, title: str) -> None:
        """Validate page title."""
        if not isinstance(title, str):
            raise ValidationError("Title must be a string", "title")
        if not title or not title.strip():
            raise ValidationError("Title is required and cannot be empty", "title")
        if len(title) > self.TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Title must be at most {self.TITLE_MAX_LENGTH} characters", "title"
            )

    @classmethod
    def validate_id(cls, page_id: str) -> None:
        """Validate page ID."""
        if not isinstance(page_id, str):
            raise ValidationError("Page ID must be a string", "id")
        if not page_id or not page_id.strip():
            raise ValidationError("Page ID cannot be empty", "id")
        if len(page_id) > cls.ID_MAX_LENGTH:
            raise ValidationError(
                f"Page ID must be at most {cls.ID_MAX_LENGTH} characters", "id"
            )

    def _validate_metadata(self, metadata: dict[str, Any]) -> None:
        """Validate metadata structure."""
        if not isinstance(metadata, dict):
            raise ValidationError("Metadata must be a dictionary", "metadata")
