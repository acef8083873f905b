"""
Content-O-Matic: rich-text content documents backed by relational block records.

Serializes Slate-style document trees into mutation batches, resolves the
executed mutations into join ids, and rebuilds documents from stored records.
"""

__version__ = "0.1.0"

from contentomatic.blocks import Block, BlockRegistry, SerializeResult
from contentomatic.exceptions import (
    ConfigurationError,
    ContentError,
    ContractViolationError,
    PreconditionError,
)
from contentomatic.services.content import (
    ContentDeserializer,
    ContentSerializer,
    MutationPathResolver,
    deserialize_value,
    resolve_mutation_paths,
    serialize_value,
)
from contentomatic.tree import Node, Value, walk

__all__ = [
    "Block",
    "BlockRegistry",
    "SerializeResult",
    "ConfigurationError",
    "ContentError",
    "ContractViolationError",
    "PreconditionError",
    "ContentSerializer",
    "MutationPathResolver",
    "ContentDeserializer",
    "serialize_value",
    "resolve_mutation_paths",
    "deserialize_value",
    "Node",
    "Value",
    "walk",
]
