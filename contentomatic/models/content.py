"""Content document model storing the serialized document."""

from typing import Any

from sqlalchemy import ForeignKey, JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from contentomatic.models.base import Base, TimestampMixin


class ContentDocument(Base, TimestampMixin):
    """Persisted document of a page.

    ``document`` holds the resolved document JSON, whose blocks reference
    their related records through ``data._joinIds``.
    """

    __tablename__ = "content_documents"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    # Reverse reference to the item this document belongs to
    page_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("pages.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    document: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    # Relationships
    page: Mapped["Page"] = relationship("Page", back_populates="content")

    def __repr__(self) -> str:
        return f"<ContentDocument(id={self.id!r}, page_id={self.page_id!r})>"
