"""
PdfMerger - Merge Exporter

Builds one PDF from a sequence of pages drawn from any number of source
documents. Each source is opened once, however many of its pages are used,
and the output keeps the order of the sequence.
Uses pikepdf for PDF manipulation operations.
"""

import io
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import pikepdf

from pdfmerger.services.pdf_source import friendly_error, open_pdf, resolve_source_rotation
from pdfmerger.utils.exceptions import EmptyInputError, ExportError

if TYPE_CHECKING:
    from pdfmerger.editor.page_model import PageRecord, SourceDocument

logger = logging.getLogger(__name__)


def group_by_source(
    pages: Sequence["PageRecord"],
) -> dict["SourceDocument", list[tuple["PageRecord", int]]]:
    """Group pages by source document, remembering each page's output position.

    Groups appear in order of first use; within a group pages keep their
    relative order.
    """
    groups: dict[SourceDocument, list[tuple[PageRecord, int]]] = {}
    for position, page in enumerate(pages):
        groups.setdefault(page.source, []).append((page, position))
    return groups


class MergeExporter:
    """Produces merged PDF bytes from a snapshot of pages."""

    def export(self, pages: Sequence["PageRecord"]) -> bytes:
        """Merge the pages into a single PDF.

        Args:
            pages: Pages in output order (usually PageCollection.snapshot())

        Returns:
            The serialized output document

        Raises:
            EmptyInputError: If there are no pages.
            ExportError: If a source cannot be reopened or a page is missing.
        """
        pages = tuple(pages)
        if not pages:
            raise EmptyInputError()

        logger.info("Creating PDF...")
        opened: list[pikepdf.Pdf] = []
        new_pdf = pikepdf.Pdf.new()
        try:
            slots = self._collect_pages(pages, opened)

            for page, src_page in zip(pages, slots):
                new_pdf.pages.append(src_page)
                self._apply_rotation(new_pdf.pages[-1], src_page, page)

            logger.info("Saving PDF...")
            buffer = io.BytesIO()
            new_pdf.save(buffer, deterministic_id=True)
        except (pikepdf.PdfError, ValueError) as e:
            logger.error(f"Failed to build merged PDF: {e}")
            raise ExportError(friendly_error(e)) from e
        finally:
            new_pdf.close()
            for src_pdf in opened:
                src_pdf.close()

        data = buffer.getvalue()
        logger.info(f"Merged {len(pages)} page(s) into {len(data):,} bytes")
        return data

    def export_to_file(self, pages: Sequence["PageRecord"], output_path: str | Path) -> Path:
        """Merge the pages and write the result to output_path.

        The file is written next to its destination and moved into place,
        so a failed export never leaves a partial file behind.

        Returns:
            The output path
        """
        data = self.export(pages)

        output_path = Path(output_path)
        tmp_path = None
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_path, output_path)
        except OSError as e:
            logger.error(f"Failed to write {output_path}: {e}")
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise ExportError(friendly_error(e)) from e

        logger.info(f"Saved merged PDF to {output_path}")
        return output_path

    def _collect_pages(
        self, pages: tuple["PageRecord", ...], opened: list[pikepdf.Pdf]
    ) -> list[pikepdf.Page]:
        """Open each source once and fetch its pages into output-order slots."""
        slots: list[pikepdf.Page | None] = [None] * len(pages)

        for source, members in group_by_source(pages).items():
            try:
                src_pdf = open_pdf(source.data)
            except (pikepdf.PdfError, ValueError) as e:
                logger.error(f"Failed to reopen {source.name}: {e}")
                raise ExportError(friendly_error(e), source_name=source.name) from e
            opened.append(src_pdf)

            for page, position in members:
                if page.source_page_index >= len(src_pdf.pages):
                    raise ExportError(
                        f"page {page.source_page_index + 1} does not exist",
                        source_name=source.name,
                    )
                slots[position] = src_pdf.pages[page.source_page_index]

        return [slot for slot in slots if slot is not None]

    def _apply_rotation(
        self, new_page: pikepdf.Page, src_page: pikepdf.Page, page: "PageRecord"
    ) -> None:
        """Compose the page's rotation with whatever the source page carries."""
        source_rotation = resolve_source_rotation(src_page)
        final_rotation = (source_rotation + page.rotation) % 360

        if final_rotation != 0:
            new_page.Rotate = final_rotation
        elif "/Rotate" in new_page.obj:
            del new_page.obj["/Rotate"]

        if page.rotation != 0:
            logger.debug(
                f"Page {page.source_name}:{page.source_page_index + 1} "
                f"rotation: source={source_rotation} + editor={page.rotation} "
                f"= {final_rotation}"
            )
