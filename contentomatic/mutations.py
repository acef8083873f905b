"""Mutation paths and mutation batches.

A mutation path such as ``images.create[1]`` names the second ``create``
entry of the ``images`` batch. It is the only link between a serialized
block node and the result of its mutation, so batch entries keep their
insertion order.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from contentomatic.exceptions import ConfigurationError

MUTATION_PATHS_KEY = "_mutationPaths"
JOIN_IDS_KEY = "_joinIds"
DISCONNECT_ALL_KEY = "disconnectAll"


class MutationAction(str, Enum):
    """Actions a block handler may request for its related records."""

    CREATE = "create"
    CONNECT = "connect"
    DISCONNECT = "disconnect"


_PATH_PATTERN = re.compile(
    r"^(?P<path>.+)\.(?P<action>create|connect|disconnect)\[(?P<index>\d+)\]$"
)


@dataclass(frozen=True)
class MutationPath:
    """Composite key of one mutation entry."""

    path: str
    action: MutationAction
    index: int

    def __str__(self) -> str:
        return f"{self.path}.{self.action.value}[{self.index}]"

    @classmethod
    def parse(cls, text: str) -> "MutationPath":
        """
        Parse a mutation path string.

        Raises:
            ValueError: If text is not of the form ``<path>.<action>[<index>]``
        """
        match = _PATH_PATTERN.match(text) if isinstance(text, str) else None
        if match is None:
            raise ValueError(f"Malformed mutation path {text!r}")
        return cls(
            path=match.group("path"),
            action=MutationAction(match.group("action")),
            index=int(match.group("index")),
        )

    def lookup(self, results: Mapping[str, Any]) -> Any:
        """Return the entry this path names in ``results``, or None."""
        by_action = results.get(self.path)
        if not isinstance(by_action, Mapping):
            return None
        entries = by_action.get(self.action.value)
        if not isinstance(entries, (list, tuple)) or self.index >= len(entries):
            return None
        return entries[self.index]


def to_action(action: Any, block_type: str | None = None) -> MutationAction:
    """Convert a handler-supplied action name."""
    try:
        return MutationAction(action)
    except ValueError:
        raise ConfigurationError(
            f"Unknown mutation action '{action}' for block type '{block_type}'. "
            f"Expected one of: {', '.join(a.value for a in MutationAction)}",
            block_type,
        ) from None


class MutationBatches:
    """Accumulates mutation entries keyed by block path, then by action."""

    def __init__(self) -> None:
        self._batches: dict[str, dict[str, Any]] = {}

    def append(self, path: str, action: MutationAction, entry: Any) -> MutationPath:
        """
        Append an entry to the batch for ``path`` and ``action``.

        The batch is created with ``disconnectAll`` set on first use.

        Returns:
            The mutation path of the appended entry
        """
        # Documents are saved whole, so every save replaces the related set
        batch = self._batches.setdefault(path, {DISCONNECT_ALL_KEY: True})
        entries = batch.setdefault(action.value, [])
        entries.append(entry)
        return MutationPath(path=path, action=action, index=len(entries) - 1)

    def __contains__(self, path: object) -> bool:
        return path in self._batches

    def __len__(self) -> int:
        return len(self._batches)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {
            path: {
                key: list(value) if isinstance(value, list) else value
                for key, value in batch.items()
            }
            for path, batch in self._batches.items()
        }
