"""Content service: saves and loads the rich content document of a page."""

import logging
import uuid
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy.orm import Session

from contentomatic.blocks.registry import BlockRegistry, BlockSpec
from contentomatic.exceptions import ContentError, DatabaseError, NotFoundError
from contentomatic.models.content import ContentDocument
from contentomatic.mutations import DISCONNECT_ALL_KEY
from contentomatic.services.content.deserializer import ContentDeserializer
from contentomatic.services.content.resolver import MutationPathResolver
from contentomatic.services.content.serializer import ContentSerializer
from contentomatic.services.page_service import PageService
from contentomatic.storage.mutation_executor import MutationExecutor
from contentomatic.storage.repositories import (
    ContentDocumentRepository,
    ContentRecordRepository,
    PageRepository,
)
from contentomatic.tree.nodes import Value

logger = logging.getLogger(__name__)


class ContentService:
    """Service layer running the serialize, execute, resolve pipeline and its reverse."""

    def __init__(self, session: Session, blocks: BlockRegistry | Iterable[BlockSpec] | None = None):
        """
        Initialize content service with database session and block configuration.

        Args:
            session: SQLAlchemy database session
            blocks: A block registry, or block configuration to build one from.
                    Default blocks are always included.
        """
        self.session = session
        self.blocks = blocks if isinstance(blocks, BlockRegistry) else BlockRegistry.from_config(blocks)
        self.page_repo = PageRepository(session)
        self.content_repo = ContentDocumentRepository(session)
        self.record_repo = ContentRecordRepository(session, self.blocks)
        self.executor = MutationExecutor(session, self.blocks)
        self.serializer = ContentSerializer(self.blocks)
        self.resolver = MutationPathResolver(self.blocks)
        self.deserializer = ContentDeserializer(self.blocks)

    async def save_content(self, page_id: str, value: Value | Mapping[str, Any]) -> ContentDocument:
        """
        Save the content document of a page.

        The document is serialized, its mutation batches are executed against
        the block record tables, and the document is stored with the
        resulting join ids. Records of a block path that the new document no
        longer uses are detached.

        Args:
            page_id: ID of the owning page
            value: Document value, or its JSON form ``{"document": ...}``

        Returns:
            The stored content document

        Raises:
            ValidationError: If page_id or a block's data is invalid
            NotFoundError: If the page or a connected record is not found
            ConfigurationError: If block handlers are misconfigured
            DatabaseError: If database operation fails
        """
        PageService.validate_id(page_id)
        if self.page_repo.get_by_id(page_id) is None:
            raise NotFoundError("Page", page_id)

        if not isinstance(value, Value):
            value = Value.from_json(value)

        serialized = self.serializer.serialize(value)
        document = serialized.pop("document")

        # Paths with no block left in the document still drop their old records
        batches: dict[str, Any] = {
            block.path: {DISCONNECT_ALL_KEY: True}
            for block in self.record_repo.blocks
        }
        batches.update(serialized)

        try:
            content = self.content_repo.get_by_page_id(page_id)
            if content is None:
                content = self.content_repo.create(
                    ContentDocument(id=str(uuid.uuid4()), page_id=page_id, document={})
                )

            results = await self.executor.execute(content.id, batches)
            resolved = self.resolver.resolve(document, results)

            content.document = resolved["document"]
            self.content_repo.update(content)
            self.session.commit()

        except ContentError:
            self.session.rollback()
            raise
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to save content: {str(e)}", e) from e

        logger.info(f"Saved content {content.id} for page {page_id} (batches: {', '.join(serialized) or 'none'})")
        return content

    def get_content(self, page_id: str) -> Value:
        """
        Load the content document of a page.

        Args:
            page_id: ID of the owning page

        Returns:
            Rebuilt document value

        Raises:
            ValidationError: If page_id is invalid
            NotFoundError: If the page has no content document
            DatabaseError: If database operation fails
        """
        PageService.validate_id(page_id)

        try:
            content = self.content_repo.get_by_page_id(page_id)
            records = self.record_repo.fetch_records(content.id) if content else {}
        except Exception as e:
            raise DatabaseError(f"Failed to get content: {str(e)}", e) from e

        if content is None:
            raise NotFoundError("ContentDocument", page_id)

        return self.deserializer.deserialize({**records, "document": content.document})
