"""Tests for pdf_source module."""

import pikepdf
import pytest
from conftest import make_pdf

from pdfmerger.services.pdf_source import (
    ErrorCode,
    PDFInfo,
    classify_error,
    friendly_error,
    get_pdf_info,
    open_pdf,
    read_page_count,
    resolve_source_rotation,
)
from pdfmerger.utils.exceptions import LoadError


class TestReadPageCount:
    def test_counts_pages(self):
        assert read_page_count(make_pdf(5), "five.pdf") == 5

    def test_invalid_bytes_raise_load_error(self):
        with pytest.raises(LoadError) as exc_info:
            read_page_count(b"garbage", "bad.pdf")
        assert "bad.pdf" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, pikepdf.PdfError)

    def test_empty_bytes_raise_load_error(self):
        with pytest.raises(LoadError):
            read_page_count(b"", "empty.pdf")


class TestResolveSourceRotation:
    def test_own_rotation(self):
        with open_pdf(make_pdf(2, rotations={1: 270})) as pdf:
            assert [resolve_source_rotation(p) for p in pdf.pages] == [0, 270]

    def test_inherited_rotation(self):
        with open_pdf(make_pdf(2, inherited_rotation=180)) as pdf:
            assert [resolve_source_rotation(p) for p in pdf.pages] == [180, 180]

    def test_own_rotation_overrides_inherited(self):
        with open_pdf(make_pdf(2, rotations={0: 90}, inherited_rotation=180)) as pdf:
            assert resolve_source_rotation(pdf.pages[0]) == 90


class TestGetPdfInfo:
    def test_basic_info(self):
        data = make_pdf(3, rotations={2: 90})
        info = get_pdf_info(data, "doc.pdf")
        assert isinstance(info, PDFInfo)
        assert info.name == "doc.pdf"
        assert info.page_count == 3
        assert info.size_bytes == len(data)
        assert info.encrypted is False
        assert info.page_rotations == [0, 0, 90]
        assert info.size_mb == pytest.approx(len(data) / (1024 * 1024))

    def test_invalid_raises(self):
        with pytest.raises(LoadError):
            get_pdf_info(b"nope", "nope.pdf")


class TestErrorClassification:
    def test_pdf_error(self):
        e = pikepdf.PdfError("broken xref")
        assert classify_error(e) is ErrorCode.CORRUPT_PDF
        assert "damaged or invalid" in friendly_error(e)

    def test_password_error(self):
        e = pikepdf.PasswordError("need password")
        assert classify_error(e) is ErrorCode.PASSWORD_PROTECTED
        assert "password" in friendly_error(e)

    def test_file_not_found(self):
        e = FileNotFoundError("x.pdf")
        assert classify_error(e) is ErrorCode.FILE_NOT_FOUND

    def test_permission(self):
        assert classify_error(PermissionError()) is ErrorCode.PERMISSION_DENIED

    def test_unknown(self):
        e = RuntimeError("boom")
        assert classify_error(e) is ErrorCode.UNKNOWN
        assert friendly_error(e) == "boom"
