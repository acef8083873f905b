"""Content serialization components: serializer, mutation path resolver and deserializer."""

from contentomatic.services.content.deserializer import ContentDeserializer, deserialize_value
from contentomatic.services.content.resolver import MutationPathResolver, resolve_mutation_paths
from contentomatic.services.content.serializer import ContentSerializer, serialize_value

__all__ = [
    "ContentSerializer",
    "MutationPathResolver",
    "ContentDeserializer",
    "serialize_value",
    "resolve_mutation_paths",
    "deserialize_value",
]
