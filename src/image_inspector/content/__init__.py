# ABOUTME: Content layer: document store records, markup references and verification
# ABOUTME: Resolve ids, extract image set references, decide verdicts

"""
Content Layer: Resolve and verify content from the document store

This layer handles:
- Resolving content ids into immutable records
- Extracting image set references from article markup
- Recursive verification of image sets and articles

Data Flow: Content id → Document store record → Verdict
"""

from .markup import MarkupParseError, dedup, extract_id_from_url, extract_image_set_ids
from .models import (
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
from .resolver import (
    ContentNotFoundError,
    ContentResolutionError,
    ContentResolver,
    ContentTransportError,
    DocumentStoreResolver,
    ResolutionError,
)
from .verifier import ContentVerifier

__all__ = [
    "Broken",
    "ContentNotFoundError",
    "ContentRecord",
    "ContentResolutionError",
    "ContentResolver",
    "ContentTransportError",
    "ContentType",
    "ContentVerifier",
    "DocumentStoreResolver",
    "MalformedMarkup",
    "MarkupParseError",
    "ResolutionError",
    "ResolutionFailed",
    "Safe",
    "UnresolvedType",
    "Verdict",
    "WrongProvenance",
    "dedup",
    "extract_id_from_url",
    "extract_image_set_ids",
]
