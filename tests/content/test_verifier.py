# ABOUTME: Tests for the recursive content verifier
# ABOUTME: Covers type dispatch, self-referencing image sets, loops, provenance and failure propagation

import pytest

from image_inspector.content.markup import MarkupParseError
from image_inspector.content.models import (
    Broken,
    MalformedMarkup,
    ResolutionFailed,
    Safe,
    UnresolvedType,
    WrongProvenance,
)
from image_inspector.content.verifier import ContentVerifier


@pytest.fixture
def verifier(content_store, config):
    return ContentVerifier(content_store, config)


class TestLeafTypes:
    """Images and graphics have nothing below them."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content_type", ["Image", "Graphic"])
    async def test_leaf_is_safe(self, verifier, content_store, content_type):
        content_store.add("leaf", content_type)

        assert await verifier.verify("leaf") == Safe(id="leaf")

    @pytest.mark.asyncio
    async def test_unknown_type_is_unresolved(self, verifier, content_store):
        content_store.add("video-1", "Video")

        verdict = await verifier.verify("video-1")

        assert verdict == UnresolvedType(id="video-1", actual_type="Video")

    @pytest.mark.asyncio
    async def test_missing_content_is_resolution_failure(self, verifier):
        verdict = await verifier.verify("nowhere")

        assert isinstance(verdict, ResolutionFailed)
        assert verdict.id == "nowhere"
        assert verdict.status_code == 404


class TestImageSets:
    """Image set membership checks."""

    @pytest.mark.asyncio
    async def test_single_self_member_is_broken_cycle(self, verifier, content_store):
        content_store.add_image_set("A", "A")

        verdict = await verifier.verify("A")

        assert verdict == Broken(id="A", reason="cycle", offending_id="A")
        # Nothing beyond the set itself is resolved
        assert content_store.calls == ["A"]

    @pytest.mark.asyncio
    async def test_self_cycle_reported_even_if_member_content_is_fine(self, verifier, content_store):
        # The set resolves as an ImageSet, the guard fires before the member would be looked at
        content_store.add_image_set("A", "A", mainImage="img-1")
        content_store.add_image("img-1")

        verdict = await verifier.verify("A")

        assert isinstance(verdict, Broken)
        assert verdict.reason == "cycle"

    @pytest.mark.asyncio
    async def test_empty_image_set_is_safe(self, verifier, content_store):
        content_store.add_image_set("empty")

        assert await verifier.verify("empty") == Safe(id="empty")

    @pytest.mark.asyncio
    async def test_members_all_safe(self, verifier, content_store):
        content_store.add_image_set("set", "img-1", "img-2")
        content_store.add_image("img-1")
        content_store.add_image("img-2")

        assert await verifier.verify("set") == Safe(id="set")
        assert content_store.calls == ["set", "img-1", "img-2"]

    @pytest.mark.asyncio
    async def test_first_failing_member_wins(self, verifier, content_store):
        content_store.add_image_set("set", "img-1", "video-1", "missing")
        content_store.add_image("img-1")
        content_store.add("video-1", "Video")

        verdict = await verifier.verify("set")

        assert verdict == UnresolvedType(id="video-1", actual_type="Video")
        assert "missing" not in content_store.calls

    @pytest.mark.asyncio
    async def test_nested_self_cycle_propagates_unchanged(self, verifier, content_store):
        content_store.add_image_set("outer", "inner")
        content_store.add_image_set("inner", "inner")

        verdict = await verifier.verify("outer")

        assert verdict == Broken(id="inner", reason="cycle", offending_id="inner")

    @pytest.mark.asyncio
    async def test_self_member_among_several_is_not_a_self_cycle(self, verifier, content_store):
        content_store.add_image_set("set", "img-1", "set")
        content_store.add_image("img-1")

        verdict = await verifier.verify("set")

        assert isinstance(verdict, Broken)
        assert verdict.reason == "reference-loop"
        assert verdict.offending_id == "set"

    @pytest.mark.asyncio
    async def test_two_node_loop_terminates(self, verifier, content_store):
        content_store.add_image_set("A", "B")
        content_store.add_image_set("B", "A")

        verdict = await verifier.verify("A")

        assert verdict == Broken(id="B", reason="reference-loop", offending_id="A")
        assert content_store.calls == ["A", "B"]


class TestArticles:
    """Article body and main image references."""

    @pytest.mark.asyncio
    async def test_article_with_safe_image_set(self, verifier, content_store):
        content_store.add_article("B", "X")
        content_store.add_image("X")

        assert await verifier.verify("B") == Safe(id="B")
        assert content_store.calls == ["B", "X"]

    @pytest.mark.asyncio
    async def test_article_propagates_broken_image_set(self, verifier, content_store):
        content_store.add_article("article", "set-ok", "set-bad")
        content_store.add_image_set("set-ok", "img-1")
        content_store.add_image("img-1")
        content_store.add_image_set("set-bad", "set-bad")

        verdict = await verifier.verify("article")

        assert verdict == Broken(id="set-bad", reason="cycle", offending_id="set-bad")

    @pytest.mark.asyncio
    async def test_duplicate_references_are_resolved_once(self, verifier, content_store):
        content_store.add_article("article", "X", "X", main_image="X")
        content_store.add_image("X")

        assert await verifier.verify("article") == Safe(id="article")
        assert content_store.calls.count("X") == 1

    @pytest.mark.asyncio
    async def test_main_image_is_checked(self, verifier, content_store):
        content_store.add_article("article", main_image="main-set")
        content_store.add_image_set("main-set", "main-set")

        verdict = await verifier.verify("article")

        assert verdict == Broken(id="main-set", reason="cycle", offending_id="main-set")

    @pytest.mark.asyncio
    async def test_body_preferred_over_body_xml(self, verifier, content_store):
        body = '<ft-content type="http://www.ft.com/ontology/content/ImageSet" url="http://x/from-body"/>'
        content_store.add_article("article", body=body, bodyXML="<p>no references</p>")
        content_store.add_image("from-body")

        assert await verifier.verify("article") == Safe(id="article")
        assert content_store.calls == ["article", "from-body"]

    @pytest.mark.asyncio
    async def test_article_without_references_is_safe(self, verifier, content_store):
        content_store.add_article("article", bodyXML="")

        assert await verifier.verify("article") == Safe(id="article")

    @pytest.mark.asyncio
    async def test_markup_failure_is_reported(self, content_store, config):
        def failing_extractor(markup):
            raise MarkupParseError("unable to parse body markup")

        content_store.add_article("article", "X")
        verifier = ContentVerifier(content_store, config, extractor=failing_extractor)

        verdict = await verifier.verify("article")

        assert verdict == MalformedMarkup(id="article", cause="unable to parse body markup")

    @pytest.mark.asyncio
    async def test_extracted_references_are_not_modified(self, content_store, config):
        cached = ["X"]
        content_store.add_article("article", main_image="main")
        content_store.add_image("X")
        content_store.add_image("main")
        verifier = ContentVerifier(content_store, config, extractor=lambda markup: cached)

        assert await verifier.verify("article") == Safe(id="article")
        assert await verifier.verify("article") == Safe(id="article")
        assert cached == ["X"]


class TestProvenance:
    """Provenance marker checks."""

    @pytest.mark.asyncio
    async def test_wrong_provenance_short_circuits(self, verifier, content_store):
        content_store.add_image_set("C", "img-1", publishReference="republished_5678")
        content_store.add_image("img-1")

        verdict = await verifier.verify("C")

        assert verdict == WrongProvenance(id="C", provenance_tag="republished_5678")
        assert content_store.calls == ["C"]

    @pytest.mark.asyncio
    async def test_wrong_provenance_precedes_self_cycle(self, verifier, content_store):
        content_store.add_image_set("A", "A", publishReference="")

        verdict = await verifier.verify("A")

        assert isinstance(verdict, WrongProvenance)

    @pytest.mark.asyncio
    async def test_child_with_wrong_provenance_fails_parent(self, verifier, content_store):
        content_store.add_article("article", "X")
        content_store.add_image("X", publishReference="other-pipeline")

        verdict = await verifier.verify("article")

        assert verdict == WrongProvenance(id="X", provenance_tag="other-pipeline")


class TestPrintOnly:
    """Print-only mode walks the graph without failing structural or provenance checks."""

    @pytest.mark.asyncio
    async def test_provenance_not_checked(self, content_store, print_only_config):
        content_store.add_image("C", publishReference="other-pipeline")
        verifier = ContentVerifier(content_store, print_only_config)

        assert await verifier.verify("C") == Safe(id="C")

    @pytest.mark.asyncio
    async def test_self_cycle_walk_terminates(self, content_store, print_only_config):
        content_store.add_image_set("A", "A")
        verifier = ContentVerifier(content_store, print_only_config)

        assert await verifier.verify("A") == Safe(id="A")
        assert content_store.calls == ["A"]

    @pytest.mark.asyncio
    async def test_every_resolved_record_is_observed(self, content_store, print_only_config):
        content_store.add_article("article", "set")
        content_store.add_image_set("set", "img-1", "set")
        content_store.add_image("img-1")
        seen = []
        verifier = ContentVerifier(content_store, print_only_config, on_resolved=lambda record: seen.append(record.id))

        await verifier.verify("article")

        assert seen == ["article", "set", "img-1"]
