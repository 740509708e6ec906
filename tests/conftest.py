# ABOUTME: Shared fixtures: an in-memory document store and a test configuration
# ABOUTME: Lets verifier and driver tests build content graphs without HTTP

from typing import Any

import pytest

from image_inspector.config import Config
from image_inspector.content.models import ContentRecord
from image_inspector.content.resolver import ContentNotFoundError

PUBLISH_REFERENCE = "tid_upp_publish_1234"
IMAGE_SET_TYPE = "http://www.ft.com/ontology/content/ImageSet"


class InMemoryContentStore:
    """ContentResolver backed by a dict of raw document store JSON."""

    def __init__(self):
        self.documents: dict[str, dict[str, Any]] = {}
        self.calls: list[str] = []

    def add(self, content_id: str, content_type: str, **fields: Any) -> None:
        document = {"uuid": content_id, "type": content_type, "publishReference": PUBLISH_REFERENCE}
        document.update(fields)
        self.documents[content_id] = document

    def add_image(self, content_id: str, **fields: Any) -> None:
        self.add(content_id, "Image", **fields)

    def add_image_set(self, content_id: str, *member_ids: str, **fields: Any) -> None:
        self.add(content_id, "ImageSet", members=[{"uuid": member} for member in member_ids], **fields)

    def add_article(self, content_id: str, *image_set_ids: str, main_image: str | None = None, **fields: Any) -> None:
        body = "".join(
            f'<p>text</p><ft-content type="{IMAGE_SET_TYPE}" url="http://api.ft.com/content/{ref}"></ft-content>'
            for ref in image_set_ids
        )
        fields.setdefault("bodyXML", f"<body>{body}</body>")
        if main_image is not None:
            fields["mainImage"] = main_image
        self.add(content_id, "Article", **fields)

    async def resolve(self, content_id: str) -> ContentRecord:
        self.calls.append(content_id)
        if content_id not in self.documents:
            raise ContentNotFoundError(content_id, "error 404", status_code=404)
        return ContentRecord.model_validate(self.documents[content_id])


@pytest.fixture
def content_store() -> InMemoryContentStore:
    return InMemoryContentStore()


@pytest.fixture
def config() -> Config:
    return Config(auth="dXNlcjpwYXNz", provenance_marker="tid_", delay_ms=0, doc_store_url="https://store.test/content/")


@pytest.fixture
def print_only_config(config: Config) -> Config:
    return config.model_copy(update={"print_only": True})
