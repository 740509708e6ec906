# ABOUTME: Content records resolved from the document store and verification verdicts
# ABOUTME: Closed content-type enum plus a tagged union of verdict models

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContentType(str, Enum):
    """Content types the verifier knows how to check."""

    IMAGE = "Image"
    GRAPHIC = "Graphic"
    IMAGE_SET = "ImageSet"
    ARTICLE = "Article"
    OTHER = "Other"

    @classmethod
    def from_raw(cls, raw: str) -> "ContentType":
        """Map a document store type string onto the enum; unknown strings become OTHER."""
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


class Member(BaseModel):
    """One entry of an image set's membership list."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(default="", alias="uuid")


class ContentRecord(BaseModel):
    """A content item as returned by the document store."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = Field(alias="uuid")
    raw_type: str = Field(default="", alias="type", description="Type string exactly as stored")
    main_image_id: str | None = Field(default=None, alias="mainImage")
    members: tuple[Member, ...] = Field(default=(), description="Image set membership, in order")
    body: str = Field(default="")
    body_xml: str = Field(default="", alias="bodyXML")
    provenance_tag: str = Field(default="", alias="publishReference")

    @field_validator("raw_type", "body", "body_xml", "provenance_tag", mode="before")
    @classmethod
    def _null_as_empty_string(cls, value):
        return "" if value is None else value

    @field_validator("members", mode="before")
    @classmethod
    def _null_as_no_members(cls, value):
        return () if value is None else value

    @property
    def content_type(self) -> ContentType:
        return ContentType.from_raw(self.raw_type)

    @property
    def body_markup(self) -> str:
        """Article body, preferring ``body`` over ``bodyXML``."""
        return self.body or self.body_xml

    @property
    def member_ids(self) -> list[str]:
        return [member.id for member in self.members]


class _VerdictBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str

    @property
    def is_safe(self) -> bool:
        return False

    @property
    def failing_id(self) -> str:
        return self.id


class Safe(_VerdictBase):
    kind: Literal["safe"] = "safe"

    @property
    def is_safe(self) -> bool:
        return True


class Broken(_VerdictBase):
    """Structural anomaly: a self-referencing image set or a longer reference loop."""

    kind: Literal["broken"] = "broken"
    reason: str
    offending_id: str

    @property
    def failing_id(self) -> str:
        return self.offending_id


class WrongProvenance(_VerdictBase):
    kind: Literal["wrong_provenance"] = "wrong_provenance"
    provenance_tag: str = ""


class UnresolvedType(_VerdictBase):
    kind: Literal["unresolved_type"] = "unresolved_type"
    actual_type: str


class ResolutionFailed(_VerdictBase):
    kind: Literal["resolution_failed"] = "resolution_failed"
    cause: str
    status_code: int | None = None


class MalformedMarkup(_VerdictBase):
    kind: Literal["malformed_markup"] = "malformed_markup"
    cause: str


Verdict = Annotated[
    Safe | Broken | WrongProvenance | UnresolvedType | ResolutionFailed | MalformedMarkup,
    Field(discriminator="kind"),
]

CYCLE = "cycle"
REFERENCE_LOOP = "reference-loop"
