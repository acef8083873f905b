"""Basic usage example for Content-O-Matic."""

import asyncio
import json

from contentomatic.blocks import ImageBlock, PageReferenceBlock
from contentomatic.config import configure_logging
from contentomatic.services import ContentService, PageService
from contentomatic.storage import Database


async def main():
    """Save a page's content, load it back and save it again."""
    configure_logging()

    # Initialize database (uses SQLite by default)
    db = Database()
    db.create_tables()

    with db.session() as session:
        pages = PageService(session)
        content_service = ContentService(session, [(ImageBlock, {"align": "center"}), PageReferenceBlock])

        guide = pages.create_page(title="Getting Started Guide", metadata={"author": "Content-O-Matic"})
        faq = pages.create_page(title="FAQ")
        print(f"Created pages: {guide.title} (ID: {guide.id}), {faq.title} (ID: {faq.id})")

        value = {
            "document": [
                {
                    "object": "block",
                    "type": "paragraph",
                    "nodes": [{"object": "text", "text": "Welcome!", "marks": [{"type": "bold"}]}],
                },
                {
                    "object": "block",
                    "type": "image",
                    "data": {"file": {"filename": "welcome.png", "publicUrl": "https://cdn.example.com/welcome.png"}},
                },
                {"object": "block", "type": "page-reference", "data": {"page": {"id": faq.id}}},
            ]
        }

        content = await content_service.save_content(guide.id, value)
        print("Stored document:")
        print(json.dumps(content.document, indent=2))

        loaded = content_service.get_content(guide.id)
        print("Loaded document:")
        print(json.dumps(loaded.to_json(), indent=2))

        # Saving the loaded document reconnects the existing records
        await content_service.save_content(guide.id, loaded)
        print("Saved again without creating new records")


if __name__ == "__main__":
    asyncio.run(main())
