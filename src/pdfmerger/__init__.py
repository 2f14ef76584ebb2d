"""
PdfMerger - Python package for merging pages from several PDF files

Load PDFs, reorder, rotate and delete their pages, and save a single
merged document.
"""

import sys

__version__ = "1.0.0"
__license__ = "GPL-3.0"


def main() -> int:
    """Main entry point for the application.

    Returns:
        The application exit code.
    """
    from pdfmerger.cli import main as cli_main

    return cli_main()


__all__ = ["main", "__version__", "__license__"]


if __name__ == "__main__":
    sys.exit(main())
