"""
PdfMerger - Utils Package

Utility modules for the application.
"""

from pdfmerger.utils.exceptions import (
    EmptyInputError,
    ExportError,
    LoadError,
    PdfMergerError,
    RenderError,
)

__all__ = [
    "PdfMergerError",
    "LoadError",
    "ExportError",
    "EmptyInputError",
    "RenderError",
]
