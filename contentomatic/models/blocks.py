"""Records holding the relational data of content blocks."""

from typing import Any, Optional

from sqlalchemy import ForeignKey, JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from contentomatic.models.base import Base, TimestampMixin


class ImageRecord(Base, TimestampMixin):
    """Image used by an image block."""

    __tablename__ = "content_images"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    content_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        ForeignKey("content_documents.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    file: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    align: Mapped[str] = mapped_column(String(50), nullable=False, default="center")

    def __repr__(self) -> str:
        return f"<ImageRecord(id={self.id!r}, align={self.align!r})>"


class PageReference(Base, TimestampMixin):
    """Join record between a content document and a referenced page."""

    __tablename__ = "content_page_references"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    content_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        ForeignKey("content_documents.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    page_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("pages.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    page: Mapped["Page"] = relationship("Page")

    def __repr__(self) -> str:
        return f"<PageReference(id={self.id!r}, page_id={self.page_id!r})>"
