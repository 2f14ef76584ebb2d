"""
PdfMerger - Page Collection

Ordered, in-memory list of pages drawn from one or more source documents,
together with the set of selected page ids. The selection is owned here so
that it can never refer to a page that is no longer in the collection.
"""

from collections.abc import Iterable, Iterator
from pathlib import Path

from pdfmerger.config import PDF_EXTENSIONS, ROTATION_STEP
from pdfmerger.editor.page_model import PageRecord, SourceDocument
from pdfmerger.services.pdf_source import friendly_error, read_page_count
from pdfmerger.utils.exceptions import LoadError
from pdfmerger.utils.logger import logger


class PageCollection:
    """Pages in output order plus the current selection.

    Every mutation keeps two invariants: ids are unique, and every selected
    id belongs to a page in the collection.
    """

    def __init__(self) -> None:
        self._pages: list[PageRecord] = []
        self._selected: set[str] = set()
        self.modified = False

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[PageRecord]:
        return iter(tuple(self._pages))

    def __getitem__(self, index: int) -> PageRecord:
        return self._pages[index]

    @property
    def pages(self) -> tuple[PageRecord, ...]:
        """Pages in their current order."""
        return tuple(self._pages)

    @property
    def is_empty(self) -> bool:
        return not self._pages

    @property
    def selected_ids(self) -> frozenset[str]:
        return frozenset(self._selected)

    @property
    def has_selection(self) -> bool:
        """Whether the deselect, rotate and delete actions apply to anything."""
        return bool(self._selected)

    def is_selected(self, page_id: str) -> bool:
        return page_id in self._selected

    def get(self, page_id: str) -> PageRecord | None:
        """Get the page with the given id, or None."""
        for page in self._pages:
            if page.id == page_id:
                return page
        return None

    def index_of(self, page_id: str) -> int:
        """Position of the page with the given id.

        Raises:
            KeyError: If no page has this id.
        """
        for i, page in enumerate(self._pages):
            if page.id == page_id:
                return i
        raise KeyError(page_id)

    def snapshot(self) -> tuple[PageRecord, ...]:
        """Freeze the current order for an export."""
        return tuple(self._pages)

    def sources(self) -> list[SourceDocument]:
        """Distinct source documents, in order of first appearance."""
        seen: dict[int, SourceDocument] = {}
        for page in self._pages:
            seen.setdefault(id(page.source), page.source)
        return list(seen.values())

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, data: bytes, source_name: str) -> list[PageRecord]:
        """Append every page of a document, in source order.

        Args:
            data: Raw PDF bytes, kept for as long as the pages live
            source_name: Human-readable name of the document

        Returns:
            The newly appended pages

        Raises:
            LoadError: If the bytes are not a well-formed PDF. Nothing is
                appended in that case.
        """
        page_count = read_page_count(data, source_name)
        source = SourceDocument(data=bytes(data), name=source_name, page_count=page_count)
        new_pages = [PageRecord(source=source, source_page_index=i) for i in range(page_count)]

        self._pages.extend(new_pages)
        if new_pages:
            self.modified = True
        logger.info(f"Loaded {page_count} page(s) from {source_name}")
        return new_pages

    def load_file(self, path: str | Path) -> list[PageRecord]:
        """Read a PDF from disk and append its pages.

        Raises:
            LoadError: If the file cannot be read or parsed.
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise LoadError(path.name, friendly_error(e)) from e
        return self.load(data, path.name)

    def load_files(self, paths: Iterable[str | Path]) -> list[PageRecord]:
        """Load several files one after the other.

        Files without a PDF extension are skipped. Loading stops at the
        first document that fails; documents loaded before it stay.

        Returns:
            All pages appended by this call

        Raises:
            LoadError: From the first document that could not be loaded.
        """
        appended: list[PageRecord] = []
        logger.info("Loading PDFs...")
        for path in paths:
            path = Path(path)
            if path.suffix.lower() not in PDF_EXTENSIONS:
                logger.warning(f"Skipping non-PDF file: {path}")
                continue
            appended.extend(self.load_file(path))
        return appended

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def reorder(self, from_index: int, to_index: int) -> None:
        """Move the page at from_index so that it ends up at to_index.

        The page is removed first, so indices after from_index shift down
        by one before it is inserted.

        Raises:
            IndexError: If either index is outside the collection.
        """
        size = len(self._pages)
        for name, index in (("from_index", from_index), ("to_index", to_index)):
            if not 0 <= index < size:
                raise IndexError(f"{name} {index} out of range for {size} page(s)")

        if from_index == to_index:
            return

        page = self._pages.pop(from_index)
        self._pages.insert(to_index, page)
        self.modified = True
        logger.debug(f"Moved page from position {from_index} to {to_index}")

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle_select(self, page_id: str) -> None:
        """Flip the selection state of a page. Unknown ids are ignored."""
        if page_id in self._selected:
            self._selected.discard(page_id)
        elif self.get(page_id) is not None:
            self._selected.add(page_id)

    def select_all(self) -> None:
        self._selected = {page.id for page in self._pages}

    def deselect_all(self) -> None:
        self._selected.clear()

    # ------------------------------------------------------------------
    # Page operations
    # ------------------------------------------------------------------

    def rotate_selected(self) -> int:
        """Rotate every selected page 90 degrees clockwise.

        Returns:
            Number of pages rotated
        """
        rotated = 0
        for page in self._pages:
            if page.id in self._selected:
                page.rotate(ROTATION_STEP)
                rotated += 1

        if rotated:
            self.modified = True
            logger.info(f"Rotated {rotated} page(s) by {ROTATION_STEP}°")
        return rotated

    def delete_selected(self) -> int:
        """Remove the selected pages and clear the selection.

        Returns:
            Number of pages removed
        """
        if not self._selected:
            return 0

        remaining = [page for page in self._pages if page.id not in self._selected]
        removed = len(self._pages) - len(remaining)
        self._pages = remaining
        self._selected.clear()

        if removed:
            self.modified = True
            logger.info(f"Deleted {removed} page(s)")
        return removed

    def clear(self) -> None:
        """Remove every page and the selection."""
        if self._pages:
            self.modified = True
        self._pages = []
        self._selected.clear()
        logger.info("Cleared all pages")

    def clear_modifications(self) -> None:
        """Clear the modified flag."""
        self.modified = False
