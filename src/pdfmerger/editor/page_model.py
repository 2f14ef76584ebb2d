"""
PdfMerger - Page Model

Data models for source documents and the pages drawn from them.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any

from pdfmerger.config import ROTATION_STEP, VALID_ROTATIONS


def normalize_rotation(degrees: int) -> int:
    """Reduce an angle to one of 0, 90, 180 or 270."""
    rotation = degrees % 360
    if rotation not in VALID_ROTATIONS:
        # Round to nearest valid rotation
        rotation = round(rotation / ROTATION_STEP) * ROTATION_STEP % 360
    return rotation


@dataclass(frozen=True, eq=False)
class SourceDocument:
    """An uploaded PDF kept in memory for as long as any of its pages exist.

    Identity matters: two pages come from the same source only when they
    share the same SourceDocument object, whatever the names say.

    Attributes:
        data: Raw bytes of the PDF
        name: Human-readable name (usually the file name)
        page_count: Number of pages in the document
        uid: Opaque identity token
    """

    data: bytes = field(repr=False)
    name: str
    page_count: int
    uid: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(eq=False)
class PageRecord:
    """One logical page in the collection.

    Attributes:
        source: Document this page was extracted from
        source_page_index: Page index inside the source (0-indexed), fixed
        rotation: Rotation delta in degrees (0, 90, 180, 270)
        id: Unique identifier, never reused
        render_handle: Rendering view of the page, populated on first render
    """

    source: SourceDocument
    source_page_index: int
    rotation: int = 0
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    render_handle: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate the page index and normalize rotation angle."""
        if not 0 <= self.source_page_index < self.source.page_count:
            raise ValueError(
                f"Page index {self.source_page_index} out of range for "
                f"{self.source.name} ({self.source.page_count} pages)"
            )
        self.rotation = normalize_rotation(self.rotation)

    @property
    def source_name(self) -> str:
        return self.source.name

    @property
    def rotation_badge(self) -> str:
        """Badge text shown on rotated pages, empty when unrotated."""
        return f"{self.rotation}°" if self.rotation else ""

    def rotate(self, degrees: int) -> None:
        """Rotate page by specified degrees."""
        self.rotation = normalize_rotation(self.rotation + degrees)

    def rotate_right(self) -> None:
        """Rotate page 90 degrees clockwise."""
        self.rotate(ROTATION_STEP)

    def page_label(self, position: int) -> str:
        """Label for the page shown at a 0-indexed position."""
        return f"Page {position + 1}"

    def to_dict(self) -> dict:
        """Convert to dictionary for listing and logging.

        Returns:
            Dictionary representation without the source bytes
        """
        return {
            "id": self.id,
            "source": self.source.name,
            "source_page_index": self.source_page_index,
            "rotation": self.rotation,
        }
