"""Storage layer for Content-O-Matic."""

from contentomatic.storage.database import Database, get_db
from contentomatic.storage.mutation_executor import MutationExecutor
from contentomatic.storage.repositories import (
    BlockRecordRepository,
    ContentDocumentRepository,
    ContentRecordRepository,
    PageRepository,
)

__all__ = [
    "Database",
    "get_db",
    "MutationExecutor",
    "PageRepository",
    "ContentDocumentRepository",
    "BlockRecordRepository",
    "ContentRecordRepository",
]
