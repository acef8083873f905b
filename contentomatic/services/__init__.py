"""Service layer for business logic and validation."""

from contentomatic.services.content_service import ContentService
from contentomatic.services.page_service import PageService

__all__ = ["ContentService", "PageService"]
