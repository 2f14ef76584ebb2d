"""
PdfMerger - Custom Exceptions Module

This module defines custom exception classes for specific error cases
in the PdfMerger application.
"""


class PdfMergerError(Exception):
    """Base exception for all PdfMerger errors.

    All custom exceptions should inherit from this class to allow
    catching any PdfMerger-specific error.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class LoadError(PdfMergerError):
    """Raised when a source document cannot be parsed as a PDF."""

    def __init__(self, source_name: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            source_name: Name of the document that failed to load
            reason: Optional reason why the document is invalid
        """
        self.source_name = source_name
        self.reason = reason
        msg = f"Could not load PDF: {source_name}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg, details=f"source={source_name}")


class ExportError(PdfMergerError):
    """Raised when the merged document cannot be produced.

    The underlying library error is chained as ``__cause__``.
    """

    def __init__(self, reason: str, source_name: str | None = None) -> None:
        """Initialize the exception.

        Args:
            reason: Reason for the failure
            source_name: Optional name of the source document involved
        """
        self.reason = reason
        self.source_name = source_name
        msg = f"Export failed: {reason}"
        details = f"source={source_name}" if source_name else None
        super().__init__(msg, details=details)


class EmptyInputError(PdfMergerError):
    """Raised when an export is requested for a collection with no pages."""

    def __init__(self, message: str = "There are no pages to export") -> None:
        super().__init__(message)


class RenderError(PdfMergerError):
    """Raised when a page thumbnail cannot be rendered."""

    def __init__(self, source_name: str, page_index: int, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            source_name: Name of the source document
            page_index: Zero-based index of the page that failed
            reason: Optional reason for the failure
        """
        self.source_name = source_name
        self.page_index = page_index
        self.reason = reason
        msg = f"Could not render page {page_index + 1} of {source_name}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg, details=f"source={source_name}, page_index={page_index}")


# Exception hierarchy summary:
# PdfMergerError (base)
# ├── LoadError
# ├── ExportError
# ├── EmptyInputError
# └── RenderError
