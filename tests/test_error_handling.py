"""Error handling and edge case tests."""

import pytest
from conftest import make_pdf

from pdfmerger.editor.page_collection import PageCollection
from pdfmerger.services.merge_exporter import MergeExporter
from pdfmerger.utils.exceptions import (
    EmptyInputError,
    ExportError,
    LoadError,
    PdfMergerError,
    RenderError,
)


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            LoadError("a.pdf"),
            ExportError("boom"),
            EmptyInputError(),
            RenderError("a.pdf", 0),
        ],
    )
    def test_all_inherit_from_base(self, error):
        assert isinstance(error, PdfMergerError)

    def test_load_error_message(self):
        error = LoadError("a.pdf", "damaged")
        assert error.message == "Could not load PDF: a.pdf - damaged"
        assert str(error) == "Could not load PDF: a.pdf - damaged (source=a.pdf)"

    def test_export_error_without_source(self):
        error = ExportError("disk full")
        assert str(error) == "Export failed: disk full"

    def test_render_error_uses_one_based_page(self):
        error = RenderError("a.pdf", 2, "bad stream")
        assert "page 3 of a.pdf" in error.message


class TestLastKnownGoodState:
    def test_failed_load_leaves_selection_and_order(self):
        collection = PageCollection()
        collection.load(make_pdf(3), "a.pdf")
        collection.toggle_select(collection[2].id)
        collection.reorder(2, 0)
        order = [p.id for p in collection]
        selected = collection.selected_ids

        with pytest.raises(LoadError):
            collection.load(b"%PDF-1.7\n%%EOF", "truncated.pdf")

        assert [p.id for p in collection] == order
        assert collection.selected_ids == selected

    def test_failed_export_can_be_retried(self):
        collection = PageCollection()
        collection.load(make_pdf(2), "a.pdf")
        exporter = MergeExporter()
        with pytest.raises(EmptyInputError):
            exporter.export(())
        assert exporter.export(collection.snapshot()).startswith(b"%PDF-")

    def test_failed_reorder_changes_nothing(self):
        collection = PageCollection()
        collection.load(make_pdf(2), "a.pdf")
        collection.clear_modifications()
        with pytest.raises(IndexError):
            collection.reorder(0, 2)
        assert collection.modified is False
