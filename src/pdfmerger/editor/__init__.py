"""
PdfMerger - Editor Module

In-memory model of the pages being merged: which documents they come from,
their order, rotation and selection, plus thumbnail rendering.

Main Components:
- PageCollection: Ordered pages and selection
- PageRecord / SourceDocument: Page and document models
- ThumbnailRenderer: PyMuPDF-based thumbnail rendering with LRU caching
"""

from pdfmerger.editor.page_collection import PageCollection
from pdfmerger.editor.page_model import PageRecord, SourceDocument, normalize_rotation

__all__ = [
    "PageCollection",
    "PageRecord",
    "SourceDocument",
    "normalize_rotation",
]
