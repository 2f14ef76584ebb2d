"""
PdfMerger - Services Package

PDF reading and merging services. No UI dependencies.
"""

from pdfmerger.services.merge_exporter import MergeExporter
from pdfmerger.services.pdf_source import PDFInfo, get_pdf_info, read_page_count

__all__ = ["MergeExporter", "PDFInfo", "get_pdf_info", "read_page_count"]
