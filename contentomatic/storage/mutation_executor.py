"""Execution of serialized mutation batches against block record tables."""

import logging
import uuid
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from contentomatic.config import get_settings
from contentomatic.exceptions import ConfigurationError, NotFoundError, ValidationError
from contentomatic.mutations import DISCONNECT_ALL_KEY, MutationAction
from contentomatic.storage.repositories import BlockRecordRepository, ContentRecordRepository

logger = logging.getLogger(__name__)

# Detach before attaching so a record both disconnected and connected ends up attached
ACTION_ORDER = (MutationAction.DISCONNECT, MutationAction.CONNECT, MutationAction.CREATE)

# Columns a connect entry may not change
PROTECTED_FIELDS = frozenset({"id", "content_id", "created_at", "updated_at"})


class MutationExecutor:
    """Runs create/connect/disconnect batches for one content document."""

    def __init__(
        self,
        session: Session,
        blocks: Mapping[str, Any] | Iterable[Any],
        prune_detached: bool | None = None,
    ):
        """
        Initialize executor with a database session and block handlers.

        Args:
            session: SQLAlchemy database session
            blocks: Block handlers; their ``record_model`` is the table of their path
            prune_detached: Delete records a save released from the content
                            document. If None, uses settings.
        """
        self.session = session
        self.records = ContentRecordRepository(session, blocks)
        if prune_detached is None:
            prune_detached = get_settings().prune_detached_records
        self.prune_detached = prune_detached

    async def execute(self, content_id: str, batches: Mapping[str, Mapping[str, Any]]) -> dict[str, dict[str, list[dict[str, Any]]]]:
        """
        Execute mutation batches for a content document.

        Connect entries may carry record fields besides ``id``; they are
        written to the connected record.

        Args:
            content_id: Content document the records belong to
            batches: Mutation batches keyed by block path, then action

        Returns:
            ``{path: {action: [{"id": ...}, ...]}}`` in entry order

        Raises:
            ConfigurationError: If no block stores records for a batch path
            NotFoundError: If a connected or disconnected record does not exist
            ValidationError: If an entry does not fit the record model
        """
        results: dict[str, dict[str, list[dict[str, Any]]]] = {}
        for path, batch in batches.items():
            try:
                repo = self.records.for_path(path)
            except KeyError:
                raise ConfigurationError(f"No block stores records for mutation path '{path}'.") from None

            previous_ids = [record.id for record in repo.get_by_content_id(content_id)] if self.prune_detached else []

            if batch.get(DISCONNECT_ALL_KEY):
                detached = repo.detach_all(content_id)
                logger.debug(f"Detached {detached} record(s) of '{path}' from content {content_id}")

            path_results: dict[str, list[dict[str, Any]]] = {}
            for action in ACTION_ORDER:
                entries = batch.get(action.value)
                if not entries:
                    continue
                path_results[action.value] = [
                    {"id": self._apply(repo, path, action, entry, content_id).id}
                    for entry in entries
                ]
            results[path] = path_results

            if previous_ids:
                pruned = repo.delete_detached(previous_ids)
                if pruned:
                    logger.debug(f"Deleted {pruned} released record(s) of '{path}'")

        return results

    def _apply(
        self,
        repo: BlockRecordRepository,
        path: str,
        action: MutationAction,
        entry: Mapping[str, Any],
        content_id: str,
    ) -> Any:
        if action is MutationAction.CREATE:
            fields = dict(entry)
            fields.setdefault("id", str(uuid.uuid4()))
            try:
                record = repo.model(content_id=content_id, **fields)
            except TypeError as e:
                raise ValidationError(f"Invalid create entry for '{path}': {e}", path) from e
            return repo.create(record)

        record_id = entry.get("id") if isinstance(entry, Mapping) else None
        record = repo.get_by_id(record_id) if record_id else None
        if record is None:
            raise NotFoundError(repo.model.__name__, str(record_id))

        if action is MutationAction.CONNECT:
            self._update_fields(repo, path, record, entry)
            return repo.attach(record, content_id)
        return repo.detach(record)

    @staticmethod
    def _update_fields(repo: BlockRecordRepository, path: str, record: Any, entry: Mapping[str, Any]) -> None:
        columns = {column.key for column in inspect(repo.model).column_attrs}
        for key, value in entry.items():
            if key == "id":
                continue
            if key not in columns or key in PROTECTED_FIELDS:
                raise ValidationError(f"Invalid connect field '{key}' for '{path}'", key)
            setattr(record, key, value)
