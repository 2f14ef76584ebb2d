"""Tests for page_model module (SourceDocument and PageRecord)."""

import pytest

from pdfmerger.editor.page_model import PageRecord, SourceDocument, normalize_rotation


def _source(pages: int = 3, name: str = "doc.pdf") -> SourceDocument:
    return SourceDocument(data=b"%PDF-stub", name=name, page_count=pages)


class TestNormalizeRotation:
    def test_valid_values_unchanged(self):
        for value in (0, 90, 180, 270):
            assert normalize_rotation(value) == value

    def test_reduces_modulo_360(self):
        assert normalize_rotation(450) == 90
        assert normalize_rotation(360) == 0

    def test_negative_angles(self):
        assert normalize_rotation(-90) == 270

    def test_rounds_to_nearest_step(self):
        assert normalize_rotation(100) == 90
        assert normalize_rotation(350) == 0


class TestSourceDocument:
    def test_identity_not_value_equality(self):
        a = _source(name="same.pdf")
        b = _source(name="same.pdf")
        assert a != b
        assert len({a, b}) == 2

    def test_unique_uid(self):
        assert _source().uid != _source().uid

    def test_size_bytes(self):
        assert _source().size_bytes == len(b"%PDF-stub")

    def test_frozen(self):
        src = _source()
        with pytest.raises(AttributeError):
            src.name = "other.pdf"


class TestPageRecord:
    def test_default_values(self):
        page = PageRecord(source=_source(), source_page_index=0)
        assert page.rotation == 0
        assert page.render_handle is None
        assert page.id

    def test_ids_are_unique(self):
        src = _source()
        ids = {PageRecord(source=src, source_page_index=i % 3).id for i in range(50)}
        assert len(ids) == 50

    def test_rotation_normalization(self):
        page = PageRecord(source=_source(), source_page_index=0, rotation=450)
        assert page.rotation == 90

    def test_index_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            PageRecord(source=_source(pages=2), source_page_index=2)

    def test_rotate_right_cycles(self):
        page = PageRecord(source=_source(), source_page_index=0)
        seen = []
        for _ in range(4):
            page.rotate_right()
            seen.append(page.rotation)
        assert seen == [90, 180, 270, 0]

    def test_rotate_degrees(self):
        page = PageRecord(source=_source(), source_page_index=0, rotation=270)
        page.rotate(180)
        assert page.rotation == 90

    def test_rotation_badge(self):
        page = PageRecord(source=_source(), source_page_index=0)
        assert page.rotation_badge == ""
        page.rotate_right()
        assert page.rotation_badge == "90°"

    def test_page_label_is_one_based(self):
        page = PageRecord(source=_source(), source_page_index=2)
        assert page.page_label(0) == "Page 1"

    def test_source_name(self):
        page = PageRecord(source=_source(name="report.pdf"), source_page_index=1)
        assert page.source_name == "report.pdf"

    def test_to_dict_has_no_bytes(self):
        page = PageRecord(source=_source(name="x.pdf"), source_page_index=1, rotation=180)
        d = page.to_dict()
        assert d == {
            "id": page.id,
            "source": "x.pdf",
            "source_page_index": 1,
            "rotation": 180,
        }
