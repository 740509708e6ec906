# ABOUTME: Document store client that resolves a content id into a ContentRecord
# ABOUTME: Single GET per lookup with basic auth and a per-content request id; no retries

from typing import Protocol

import httpx
from pydantic import ValidationError

from image_inspector.config import Config, get_config
from image_inspector.content.models import ContentRecord
from image_inspector.utils.logging import get_logger, log_api_call


class ResolutionError(Exception):
    """Raised when a content id cannot be resolved into a record."""

    def __init__(self, content_id: str, message: str, status_code: int | None = None):
        super().__init__(message)
        self.content_id = content_id
        self.status_code = status_code


class ContentNotFoundError(ResolutionError):
    """The document store has no record for the id."""


class ContentResolutionError(ResolutionError):
    """The document store answered with a non-200 status."""


class ContentTransportError(ResolutionError):
    """The request failed before a usable response was received."""


class ContentResolver(Protocol):
    """Protocol for looking up content by id."""

    async def resolve(self, content_id: str) -> ContentRecord:
        """Resolve a content id.

        Raises:
            ResolutionError: If the record cannot be fetched or decoded
        """
        ...


class DocumentStoreResolver:
    """Resolves content ids against the document store API."""

    def __init__(self, config: Config | None = None, client: httpx.AsyncClient | None = None):
        self.config = config or get_config()
        self.http_client = client or httpx.AsyncClient()  # Allow for dependency injection
        self._owns_client = client is None
        self.logger = get_logger(__name__)

    def content_url(self, content_id: str) -> str:
        return self.config.doc_store_url + content_id

    def request_headers(self, content_id: str) -> dict[str, str]:
        return {
            "Authorization": f"Basic {self.config.auth}",
            "X-Request-Id": self.config.request_id_prefix + content_id,
        }

    @log_api_call("document-store")
    async def resolve(self, content_id: str) -> ContentRecord:
        """Fetch and decode one content record."""
        try:
            response = await self.http_client.get(
                self.content_url(content_id), headers=self.request_headers(content_id)
            )
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            # ids taken from article markup may not be encodable into a URL or header
            raise ContentTransportError(content_id, f"request for {content_id} failed: {e}") from e

        if response.status_code == httpx.codes.NOT_FOUND:
            raise ContentNotFoundError(content_id, f"error {response.status_code}", status_code=response.status_code)
        if response.status_code != httpx.codes.OK:
            raise ContentResolutionError(content_id, f"error {response.status_code}", status_code=response.status_code)

        try:
            record = ContentRecord.model_validate_json(response.content)
        except ValidationError as e:
            raise ContentTransportError(content_id, f"undecodable record for {content_id}: {e}") from e

        self.logger.debug(
            "Resolved content",
            content_id=content_id,
            content_type=record.raw_type,
            members=len(record.members),
        )
        return record

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "DocumentStoreResolver":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
