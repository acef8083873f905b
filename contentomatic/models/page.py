"""Page model owning a content document."""

from typing import Any, Optional

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from contentomatic.models.base import Base, TimestampMixin


class Page(Base, TimestampMixin):
    """Page model: the item a content document belongs to."""

    __tablename__ = "pages"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    # Use 'meta' as Python attribute name to avoid SQLAlchemy reserved name conflict
    # Database column is still 'metadata' for compatibility
    meta: Mapped[Optional[dict[str, Any]]] = mapped_column(
        "metadata", JSON, nullable=True, default=dict
    )

    # Relationships
    content: Mapped[Optional["ContentDocument"]] = relationship(
        "ContentDocument", back_populates="page", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Page(id={self.id!r}, title={self.title!r})>"
