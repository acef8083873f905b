"""Block referencing another page."""

from collections.abc import Mapping, Sequence
from typing import Any

from contentomatic.blocks.base import Block, SerializeResult, record_id
from contentomatic.exceptions import ValidationError
from contentomatic.models.blocks import PageReference
from contentomatic.mutations import JOIN_IDS_KEY
from contentomatic.tree.nodes import Node, Value


class PageReferenceBlock(Block):
    """Reference to another page, stored as a join record.

    New references carry ``data.page = {"id": ...}`` and create a join
    record. References loaded from storage keep their ``_joinIds`` and
    reconnect the existing join records. Deleting the referenced page deletes
    its join records; such a reference loads with ``data.page = None`` and is
    dropped on the next save.
    """

    type = "page-reference"
    path = "page_references"
    record_model = PageReference
    record_includes = ("page",)

    def serialize(self, value: Value, node: Node) -> SerializeResult:
        data = node.data
        join_ids = data.get(JOIN_IDS_KEY) or []

        if join_ids:
            mutations = {"connect": [{"id": join_id} for join_id in join_ids]}
        else:
            page = data.get("page")
            page_id = page.get("id") if isinstance(page, Mapping) else data.get("pageId")
            if not page_id:
                if "page" in data and page is None:
                    return SerializeResult(node=None)
                raise ValidationError("Page reference blocks require a page id", "page")
            mutations = {"create": {"page_id": page_id}}

        return SerializeResult(
            node={"object": "block", "type": self.type, "data": {}},
            mutations=mutations,
        )

    def deserialize(self, node: Node, joins: Sequence[Any]) -> Node | None:
        if not joins:
            return None

        found = [join for join in joins if join is not None]
        if not found:
            return Node(kind="block", type=self.type, data={"page": None})

        join = found[0]
        return Node(
            kind="block",
            type=self.type,
            data={
                # Ids of deleted join records are left out
                JOIN_IDS_KEY: [record_id(record) for record in found],
                "page": join.get("page") or {"id": join.get("page_id")},
            },
        )
