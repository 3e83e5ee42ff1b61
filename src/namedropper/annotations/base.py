from collections.abc import Hashable
from dataclasses import dataclass

# Tooltip-style descriptions are cut after this many characters
DESCRIPTION_LENGTH = 100


@dataclass(frozen=True)
class TextSpan:
    """A contiguous run of document text."""

    start_offset: int  # Character offset of text[0] in the document
    text: str

    def __post_init__(self) -> None:
        if self.start_offset < 0:
            raise ValueError(f"start_offset must be non-negative, got {self.start_offset}")

    @property
    def end_offset(self) -> int:
        return self.start_offset + len(self.text)


@dataclass(frozen=True)
class RawAnnotation:
    """A resource recognized by the annotator, positioned in the text it was sent."""

    surface_form: str  # Possibly whitespace-normalized by the annotator
    offset: int  # Relative to the submitted (stripped) text
    uri: str
    label: str | None = None
    abstract: str | None = None
    types: tuple[str, ...] = ()
    similarity: float | None = None
    support: int | None = None


@dataclass(frozen=True)
class ResolvedAnnotation:
    """A raw annotation positioned in original document coordinates."""

    raw: RawAnnotation
    original_surface_form: str  # Literal document text, whitespace preserved
    document_offset: int

    @property
    def surface_form(self) -> str:
        return self.raw.surface_form

    @property
    def uri(self) -> str:
        return self.raw.uri

    @property
    def label(self) -> str | None:
        return self.raw.label

    @property
    def length(self) -> int:
        return len(self.original_surface_form)

    @property
    def end(self) -> int:
        return self.document_offset + self.length

    @property
    def selection_range(self) -> tuple[int, int]:
        """Document range to highlight for this annotation."""
        return (self.document_offset, self.end)

    @property
    def display_name(self) -> str:
        # use the recognized surface form if the annotator found no label
        if not self.raw.label:
            return self.raw.surface_form
        return self.raw.label

    @property
    def description(self) -> str:
        abstract = self.raw.abstract
        if not abstract:
            return self.raw.uri
        if len(abstract) > DESCRIPTION_LENGTH:
            return abstract[:DESCRIPTION_LENGTH] + " ..."
        return abstract

    def overlaps(self, span: "AcceptedSpan") -> bool:
        return self.document_offset < span.end and span.start < self.end


@dataclass(frozen=True)
class AcceptedSpan:
    """A document region already committed to a name tag."""

    start: int
    length: int
    name_type: Hashable = None

    @property
    def end(self) -> int:
        return self.start + self.length

    @classmethod
    def from_annotation(cls, annotation: ResolvedAnnotation, name_type: Hashable = None) -> "AcceptedSpan":
        return cls(start=annotation.document_offset, length=annotation.length, name_type=name_type)
