"""Pytest configuration for pdfmerger tests.

Test documents are built in memory with pikepdf. Every page of a generated
document gets a distinct MediaBox width so that tests can tell which source
page ended up where in a merged result.
"""

import io

import pikepdf
import pytest


def make_pdf(
    num_pages: int = 3,
    base_width: int = 600,
    rotations: dict[int, int] | None = None,
    inherited_rotation: int | None = None,
) -> bytes:
    """Create a PDF whose page i is (base_width + i) points wide.

    Args:
        num_pages: Number of pages
        base_width: Width of the first page; later pages are one point wider each
        rotations: Optional {page_index: degrees} written as /Rotate on the page
        inherited_rotation: Optional /Rotate set on the page tree root
    """
    rotations = rotations or {}
    pdf = pikepdf.Pdf.new()
    for i in range(num_pages):
        page = pikepdf.Dictionary(
            Type=pikepdf.Name.Page,
            MediaBox=[0, 0, base_width + i, 792],
            Contents=pdf.make_stream(f"BT /F1 12 Tf 100 700 Td (Page {i + 1}) Tj ET".encode()),
        )
        if i in rotations:
            page.Rotate = rotations[i]
        pdf.pages.append(pikepdf.Page(page))
    if inherited_rotation is not None:
        pdf.Root.Pages.Rotate = inherited_rotation

    buffer = io.BytesIO()
    pdf.save(buffer)
    pdf.close()
    return buffer.getvalue()


def page_widths(data: bytes) -> list[int]:
    """MediaBox widths of every page of a PDF, in order."""
    with pikepdf.Pdf.open(io.BytesIO(data)) as pdf:
        return [int(page.mediabox[2]) for page in pdf.pages]


def page_rotations(data: bytes) -> list[int]:
    """Own /Rotate of every page of a PDF, 0 when absent."""
    with pikepdf.Pdf.open(io.BytesIO(data)) as pdf:
        return [int(page.obj.get("/Rotate", 0)) for page in pdf.pages]


@pytest.fixture
def three_page_pdf() -> bytes:
    return make_pdf(3, base_width=600)


@pytest.fixture
def two_page_pdf() -> bytes:
    return make_pdf(2, base_width=700)


@pytest.fixture
def pdf_files(tmp_path):
    """Two PDFs on disk: a.pdf (3 pages, widths 600-602), b.pdf (2 pages, 700-701)."""
    a = tmp_path / "a.pdf"
    b = tmp_path / "b.pdf"
    a.write_bytes(make_pdf(3, base_width=600))
    b.write_bytes(make_pdf(2, base_width=700))
    return a, b
