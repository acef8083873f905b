"""Immutable document tree values.

A document is a tree of nodes in the Slate.js JSON shape::

    {"object": "document", "data": {}, "nodes": [
        {"object": "block", "type": "paragraph", "data": {}, "nodes": [
            {"object": "text", "text": "Hello", "marks": [{"object": "mark", "type": "bold", "data": {}}]},
        ]},
    ]}

Nodes are frozen pydantic models. Updates return new nodes and share every
untouched child with the original.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

NodeKind = Literal["document", "block", "inline", "text"]

CONTAINER_KINDS = ("document", "block", "inline")


class Mark(BaseModel):
    """Formatting mark applied to a text node (bold, italic, ...)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: Literal["mark"] = Field(default="mark", alias="object")
    type: str
    data: dict[str, Any] = Field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        return {"object": self.kind, "type": self.type, "data": dict(self.data)}


class Node(BaseModel):
    """A single node of a document tree."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: NodeKind = Field(alias="object")
    type: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    nodes: tuple["Node", ...] | None = None
    text: str | None = None
    marks: tuple[Mark, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _fill_container_defaults(cls, values: Any) -> Any:
        if not isinstance(values, Mapping):
            return values
        values = dict(values)
        kind = values.get("object", values.get("kind"))
        if kind in CONTAINER_KINDS and values.get("nodes") is None:
            values["nodes"] = ()
        if kind == "text" and values.get("text") is None:
            values["text"] = ""
        if values.get("data") is None:
            values.pop("data", None)
        return values

    @model_validator(mode="after")
    def _check_shape(self) -> "Node":
        if self.kind == "text" and self.nodes is not None:
            raise ValueError("Text nodes cannot have child nodes")
        if self.kind in ("block", "inline") and not self.type:
            raise ValueError(f"{self.kind.capitalize()} nodes require a type")
        return self

    @property
    def is_leaf(self) -> bool:
        return self.nodes is None

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "Node":
        """Build a node (and its whole subtree) from its JSON form."""
        return cls.model_validate(obj)

    def to_json(self, include_nodes: bool = True) -> dict[str, Any]:
        """
        Convert the node to its JSON form.

        Args:
            include_nodes: If False, the children list is emptied instead of
                           converted, so no child is visited.

        Returns:
            Plain mapping of the node
        """
        result: dict[str, Any] = {"object": self.kind}
        if self.kind == "text":
            result["text"] = self.text
            result["marks"] = [mark.to_json() for mark in self.marks]
            return result

        if self.type is not None:
            result["type"] = self.type
        result["data"] = dict(self.data)
        if self.nodes is not None:
            result["nodes"] = (
                [child.to_json() for child in self.nodes] if include_nodes else []
            )
        return result

    def with_nodes(self, nodes: Iterable["Node"]) -> "Node":
        """Return a copy of this node with its children replaced."""
        return self.model_copy(update={"nodes": tuple(nodes)})

    def with_data(self, data: Mapping[str, Any]) -> "Node":
        """Return a copy of this node with its data replaced."""
        return self.model_copy(update={"data": dict(data)})


Node.model_rebuild()


class Value(BaseModel):
    """The editor value: a wrapper around the root document node."""

    model_config = ConfigDict(frozen=True)

    document: Node

    @model_validator(mode="after")
    def _check_document(self) -> "Value":
        if self.document.kind != "document":
            raise ValueError("Value.document must be a document node")
        return self

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "Value":
        """
        Build a value from ``{"document": ...}``.

        The document may be a full document node or a bare list of its
        top-level nodes.
        """
        document = obj["document"]
        if isinstance(document, Node):
            return cls(document=document)
        if isinstance(document, (list, tuple)):
            document = {"object": "document", "data": {}, "nodes": list(document)}
        return cls(document=Node.from_json(document))

    def to_json(self) -> dict[str, Any]:
        return {"document": self.document.to_json()}


def is_node(obj: Any) -> bool:
    """Check whether obj is a tree node."""
    return isinstance(obj, Node)
