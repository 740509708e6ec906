# ABOUTME: Extracts image set references embedded in article body markup
# ABOUTME: Tolerant BeautifulSoup fragment parsing plus the id de-duplication helper

from collections.abc import Iterable

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

IMAGE_SET_TYPE = "http://www.ft.com/ontology/content/ImageSet"
REFERENCE_TAGS = ["ft-content", "content"]


class MarkupParseError(Exception):
    """Raised when article markup cannot be tokenized at all."""


def extract_id_from_url(url: str) -> str:
    """Return the path segment after the last ``/``."""
    return url.rsplit("/", 1)[-1]


def _reference_id(node: Tag) -> str | None:
    if node.get("type") != IMAGE_SET_TYPE:
        return None

    url = node.get("url")
    if url is not None:
        return extract_id_from_url(url)
    return node.get("id")


def extract_image_set_ids(markup: str) -> list[str]:
    """Extract image set ids referenced from a markup fragment.

    Every ``ft-content``/``content`` element typed as an image set contributes
    one id, in document order, nested elements included. Duplicates are kept.

    Args:
        markup: Raw body markup, possibly a partial fragment

    Returns:
        Referenced image set ids

    Raises:
        MarkupParseError: If the parser rejects the markup
    """
    if not markup or not markup.strip():
        return []

    try:
        # html.parser does not wrap the fragment in <html>/<body>
        soup = BeautifulSoup(markup, "html.parser")
    except (ParserRejectedMarkup, AssertionError, ValueError) as e:
        raise MarkupParseError(f"unable to parse body markup: {e}") from e

    ids = []
    # find_all walks the tree depth-first in document order
    for node in soup.find_all(REFERENCE_TAGS):
        reference = _reference_id(node)
        if reference is not None:
            ids.append(reference)
    return ids


def dedup(ids: Iterable[str]) -> list[str]:
    """Unique ids in sorted order."""
    return sorted(set(ids))
