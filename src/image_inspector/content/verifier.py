# ABOUTME: Recursive verifier that walks image sets and articles down to their images
# ABOUTME: Flags self-referencing image sets, reference loops, foreign provenance and unknown types

from collections.abc import Callable
from typing import assert_never

from image_inspector.config import Config, get_config
from image_inspector.content.markup import MarkupParseError, dedup, extract_image_set_ids
from image_inspector.content.models import (
    CYCLE,
    REFERENCE_LOOP,
    Broken,
    ContentRecord,
    ContentType,
    MalformedMarkup,
    ResolutionFailed,
    Safe,
    UnresolvedType,
    Verdict,
    WrongProvenance,
)
from image_inspector.content.resolver import ContentResolver, ResolutionError
from image_inspector.utils.logging import get_logger

ResolvedObserver = Callable[[ContentRecord], None]


class ContentVerifier:
    """Verifies a content id and everything reachable from it.

    Records are resolved afresh on every visit. The first failing child decides
    the verdict of its parent. Identifiers already on the current resolution
    path are never resolved again, so loops terminate.
    """

    def __init__(
        self,
        resolver: ContentResolver,
        config: Config | None = None,
        extractor: Callable[[str], list[str]] = extract_image_set_ids,
        on_resolved: ResolvedObserver | None = None,
    ):
        config = config or get_config()
        self.resolver = resolver
        self.extractor = extractor
        self.on_resolved = on_resolved
        self.provenance_marker = config.provenance_marker
        self.print_only = config.print_only
        self.logger = get_logger(__name__)

    async def verify(self, content_id: str) -> Verdict:
        """Verify one content id and return its verdict."""
        return await self._verify(content_id, ())

    async def _verify(self, content_id: str, path: tuple[str, ...]) -> Verdict:
        try:
            record = await self.resolver.resolve(content_id)
        except ResolutionError as e:
            return ResolutionFailed(id=content_id, cause=str(e), status_code=e.status_code)

        if self.on_resolved is not None:
            self.on_resolved(record)

        if not self.print_only and self.provenance_marker not in record.provenance_tag:
            self.logger.info(
                "Unexpected provenance",
                content_id=content_id,
                provenance_tag=record.provenance_tag,
                expected=self.provenance_marker,
            )
            return WrongProvenance(id=content_id, provenance_tag=record.provenance_tag)

        path = (*path, content_id)
        content_type = record.content_type

        if content_type is ContentType.IMAGE or content_type is ContentType.GRAPHIC:
            return Safe(id=content_id)
        elif content_type is ContentType.IMAGE_SET:
            return await self._verify_image_set(record, path)
        elif content_type is ContentType.ARTICLE:
            return await self._verify_article(record, path)
        elif content_type is ContentType.OTHER:
            self.logger.info("Unexpected content type", content_id=content_id, content_type=record.raw_type)
            return UnresolvedType(id=content_id, actual_type=record.raw_type)
        else:
            assert_never(content_type)

    async def _verify_image_set(self, record: ContentRecord, path: tuple[str, ...]) -> Verdict:
        member_ids = record.member_ids

        if len(member_ids) == 1 and member_ids[0] == record.id and not self.print_only:
            self.logger.warning("Image set is its own only member", content_id=record.id)
            return Broken(id=record.id, reason=CYCLE, offending_id=record.id)

        return await self._verify_children(record.id, member_ids, path)

    async def _verify_article(self, record: ContentRecord, path: tuple[str, ...]) -> Verdict:
        try:
            references = self.extractor(record.body_markup)
        except MarkupParseError as e:
            self.logger.warning("Article body could not be parsed", content_id=record.id, error=str(e))
            return MalformedMarkup(id=record.id, cause=str(e))

        if record.main_image_id:
            references = [*references, record.main_image_id]

        return await self._verify_children(record.id, dedup(references), path)

    async def _verify_children(self, parent_id: str, child_ids: list[str], path: tuple[str, ...]) -> Verdict:
        for child_id in child_ids:
            if child_id in path:
                if self.print_only:
                    continue
                self.logger.warning("Reference loop", content_id=parent_id, offending_id=child_id)
                return Broken(id=parent_id, reason=REFERENCE_LOOP, offending_id=child_id)

            verdict = await self._verify(child_id, path)
            if not verdict.is_safe:
                return verdict

        return Safe(id=parent_id)
