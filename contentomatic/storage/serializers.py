"""Model serialization for fetched block records."""

from typing import Any

from sqlalchemy import inspect


def serialize_model(obj: Any, include: tuple[str, ...] = ()) -> dict[str, Any]:
    """
    Serialize a SQLAlchemy model to dictionary.

    Args:
        obj: SQLAlchemy model instance
        include: Names of relationships to serialize as nested dictionaries

    Returns:
        Dictionary representation of the model's columns (plus included relationships)
    """
    result = {}
    for column in inspect(obj).mapper.column_attrs:
        value = getattr(obj, column.key)
        # Map 'meta' attribute back to 'metadata' for API compatibility
        # (SQLAlchemy reserves 'metadata' as a name, so we use 'meta' internally)
        output_key = "metadata" if column.key == "meta" else column.key

        if hasattr(value, "isoformat"):  # datetime
            result[output_key] = value.isoformat()
        else:
            result[output_key] = value

    for name in include:
        related = getattr(obj, name)
        if related is None:
            result[name] = None
        elif isinstance(related, list):
            result[name] = [serialize_model(item) for item in related]
        else:
            result[name] = serialize_model(related)
    return result
