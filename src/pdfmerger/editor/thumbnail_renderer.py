"""
PdfMerger - Thumbnail Renderer

Renders page thumbnails with PyMuPDF into Pillow images, with an LRU cache
so that re-rendering an unchanged page is free.
"""

from collections import OrderedDict
from pathlib import Path

import fitz
from PIL import Image

from pdfmerger.config import (
    THUMBNAIL_CACHE_SIZE,
    THUMBNAIL_FILENAME_PATTERN,
    THUMBNAIL_SCALE,
)
from pdfmerger.editor.page_collection import PageCollection
from pdfmerger.editor.page_model import PageRecord, SourceDocument
from pdfmerger.utils.exceptions import RenderError
from pdfmerger.utils.logger import logger

# Clockwise page rotation expressed as Pillow transposes
_ROTATION_TRANSPOSE = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}

CacheKey = tuple[str, int, float, int]


class ThumbnailRenderer:
    """Renders PDF page thumbnails with caching.

    Each source document is opened once with PyMuPDF and kept open until
    its cache is cleared. Rendered images are cached per
    (source, page, scale, rotation).
    """

    def __init__(
        self, cache_size: int = THUMBNAIL_CACHE_SIZE, default_scale: float = THUMBNAIL_SCALE
    ) -> None:
        """Initialize the thumbnail renderer.

        Args:
            cache_size: Maximum number of thumbnails to cache
            default_scale: Default render scale (1.0 = 72 dpi)
        """
        self._cache: OrderedDict[CacheKey, Image.Image] = OrderedDict()
        self._cache_size = cache_size
        self._default_scale = default_scale
        self._documents: dict[str, fitz.Document] = {}
        # Pages loaded from the documents above, keyed by (source uid, page index)
        self._handles: dict[tuple[str, int], fitz.Page] = {}

    def _get_cache_key(self, page: PageRecord, scale: float) -> CacheKey:
        return (page.source.uid, page.source_page_index, scale, page.rotation)

    def _get_document(self, source: SourceDocument) -> fitz.Document:
        """Get or open the PyMuPDF document for a source."""
        doc = self._documents.get(source.uid)
        if doc is not None:
            return doc

        try:
            doc = fitz.open(stream=source.data, filetype="pdf")
        except (RuntimeError, ValueError) as e:
            raise RenderError(source.name, 0, str(e)) from e
        self._documents[source.uid] = doc
        return doc

    def _evict_cache(self) -> None:
        """Evict oldest items from cache."""
        while len(self._cache) > self._cache_size:
            self._cache.popitem(last=False)

    def get_render_handle(self, page: PageRecord) -> fitz.Page:
        """Return the rendering view of a page, loading it on first use.

        A handle left on the page by another renderer, or by this one before
        its documents were closed, is replaced by one from a document this
        renderer holds open.
        """
        key = (page.source.uid, page.source_page_index)
        handle = self._handles.get(key)
        if handle is None:
            doc = self._get_document(page.source)
            try:
                handle = doc.load_page(page.source_page_index)
            except (IndexError, ValueError) as e:
                raise RenderError(page.source_name, page.source_page_index, str(e)) from e
            self._handles[key] = handle
        page.render_handle = handle
        return handle

    def render_page(self, page: PageRecord, scale: float | None = None) -> Image.Image:
        """Render one page, applying its rotation on top of the source rotation.

        Args:
            page: The page to render
            scale: Render scale, defaults to the renderer's default

        Returns:
            RGB image of the page

        Raises:
            RenderError: If the page cannot be rendered.
        """
        if scale is None:
            scale = self._default_scale

        cache_key = self._get_cache_key(page, scale)
        cached = self._cache.get(cache_key)
        if cached is not None:
            self._cache.move_to_end(cache_key)
            return cached

        handle = self.get_render_handle(page)
        try:
            pixmap = handle.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
        except (RuntimeError, TypeError, ValueError) as e:
            raise RenderError(page.source_name, page.source_page_index, str(e)) from e

        image = Image.frombytes("RGB", (pixmap.width, pixmap.height), pixmap.samples)
        image = self._apply_rotation(image, page.rotation)

        self._cache[cache_key] = image
        self._evict_cache()
        return image

    def _apply_rotation(self, image: Image.Image, rotation: int) -> Image.Image:
        """Apply a clockwise rotation to an image."""
        transpose = _ROTATION_TRANSPOSE.get(rotation % 360)
        if transpose is None:
            return image
        return image.transpose(transpose)

    def render_collection(
        self, collection: PageCollection, scale: float | None = None
    ) -> list[Image.Image]:
        """Render every page of the collection in order."""
        return [self.render_page(page, scale) for page in collection]

    def save_thumbnails(
        self, collection: PageCollection, output_dir: str | Path, scale: float | None = None
    ) -> list[Path]:
        """Render the collection and write one PNG per page.

        Files are named after the page's position in the collection.

        Returns:
            Paths of the written files, in collection order
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        written: list[Path] = []
        for position, image in enumerate(self.render_collection(collection, scale)):
            path = output_dir / THUMBNAIL_FILENAME_PATTERN.format(position=position + 1)
            image.save(path, format="PNG")
            written.append(path)

        logger.info(f"Wrote {len(written)} thumbnail(s) to {output_dir}")
        return written

    def release(self, collection: PageCollection) -> None:
        """Forget documents no longer used by the collection."""
        live = {source.uid for source in collection.sources()}
        stale = [uid for uid in self._documents if uid not in live]
        for uid in stale:
            for key in [k for k in self._cache if k[0] == uid]:
                del self._cache[key]
            for key in [k for k in self._handles if k[0] == uid]:
                del self._handles[key]
            self._documents.pop(uid).close()

    def clear_all(self, collection: PageCollection | None = None) -> None:
        """Clear all caches and close every open document.

        Render handles of the collection's pages are dropped with them.
        Pages outside the collection get a fresh handle the next time they
        are rendered.
        """
        if collection is not None:
            for page in collection:
                page.render_handle = None
        self._cache.clear()
        self._handles.clear()
        for doc in self._documents.values():
            doc.close()
        self._documents.clear()

    @property
    def cached_count(self) -> int:
        return len(self._cache)
