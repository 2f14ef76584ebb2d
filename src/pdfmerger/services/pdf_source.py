"""
PdfMerger - PDF Source Service

Pure-Python helpers around pikepdf for reading source documents held in memory.
No UI dependencies - can be used from the CLI, the editor model, or scripts.
"""

import io
import logging
from dataclasses import dataclass, field
from enum import Enum, auto

import pikepdf

from pdfmerger.utils.exceptions import LoadError
from pdfmerger.utils.i18n import _

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """Error classification for source documents."""

    NONE = auto()
    FILE_NOT_FOUND = auto()
    PERMISSION_DENIED = auto()
    CORRUPT_PDF = auto()
    PASSWORD_PROTECTED = auto()
    UNKNOWN = auto()


def classify_error(e: BaseException) -> ErrorCode:
    """Classify an exception into an ErrorCode."""
    if isinstance(e, FileNotFoundError):
        return ErrorCode.FILE_NOT_FOUND
    if isinstance(e, PermissionError):
        return ErrorCode.PERMISSION_DENIED
    if isinstance(e, pikepdf.PasswordError):
        return ErrorCode.PASSWORD_PROTECTED
    if isinstance(e, pikepdf.PdfError):
        return ErrorCode.CORRUPT_PDF
    return ErrorCode.UNKNOWN


def friendly_error(e: BaseException) -> str:
    """Map common exceptions to user-friendly messages."""
    if isinstance(e, FileNotFoundError):
        return _("Could not find the file. Was it moved or deleted?")
    if isinstance(e, PermissionError):
        return _("Permission denied while reading the file.")
    if isinstance(e, pikepdf.PasswordError):
        return _("This PDF is password-protected. Remove the password first.")
    if isinstance(e, pikepdf.PdfError):
        return _("The PDF file appears to be damaged or invalid: {error}").format(error=e)
    return str(e)


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class PDFInfo:
    """Basic information about an in-memory PDF."""

    name: str
    page_count: int
    size_bytes: int
    pdf_version: str = ""
    encrypted: bool = False
    title: str = ""
    author: str = ""
    page_rotations: list[int] = field(default_factory=list)

    @property
    def size_mb(self) -> float:
        return self.size_bytes / (1024 * 1024)


# ---------------------------------------------------------------------------
# Opening documents
# ---------------------------------------------------------------------------


def open_pdf(data: bytes) -> pikepdf.Pdf:
    """Open a PDF held in memory.

    The returned Pdf reads lazily from its own stream; close it when done.

    Raises:
        pikepdf.PdfError: If the bytes are not a readable PDF.
    """
    return pikepdf.Pdf.open(io.BytesIO(data))


def read_page_count(data: bytes, source_name: str) -> int:
    """Parse a document and return how many pages it has.

    Args:
        data: Raw bytes of the document.
        source_name: Human-readable name used in errors and logs.

    Returns:
        Number of pages in the document.

    Raises:
        LoadError: If the bytes are not a well-formed PDF.
    """
    try:
        with open_pdf(data) as pdf:
            count = len(pdf.pages)
    except (pikepdf.PdfError, ValueError) as e:
        logger.error("Failed to parse %s: %s", source_name, e)
        raise LoadError(source_name, friendly_error(e)) from e

    logger.debug("Parsed %s: %d pages", source_name, count)
    return count


def resolve_source_rotation(page: pikepdf.Page) -> int:
    """Resolve the effective /Rotate of a page, including inherited values.

    /Rotate is inheritable from the page tree, so when the page itself
    carries none the /Parent chain is searched.
    """
    node = page.obj
    while node is not None:
        if "/Rotate" in node:
            return int(node.Rotate) % 360
        node = node.get("/Parent")
    return 0


def get_pdf_info(data: bytes, source_name: str) -> PDFInfo:
    """Get basic information about an in-memory PDF.

    Raises:
        LoadError: If the bytes are not a well-formed PDF.
    """
    try:
        with open_pdf(data) as pdf:
            docinfo = pdf.docinfo
            return PDFInfo(
                name=source_name,
                page_count=len(pdf.pages),
                size_bytes=len(data),
                pdf_version=str(pdf.pdf_version),
                encrypted=bool(pdf.is_encrypted),
                title=str(docinfo.get("/Title", "")),
                author=str(docinfo.get("/Author", "")),
                page_rotations=[resolve_source_rotation(p) for p in pdf.pages],
            )
    except (pikepdf.PdfError, ValueError) as e:
        raise LoadError(source_name, friendly_error(e)) from e
