"""Database models for Content-O-Matic."""

from contentomatic.models.base import Base
from contentomatic.models.blocks import ImageRecord, PageReference
from contentomatic.models.content import ContentDocument
from contentomatic.models.page import Page

__all__ = ["Base", "Page", "ContentDocument", "ImageRecord", "PageReference"]
