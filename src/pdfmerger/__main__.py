#!/usr/bin/env python3
"""
PdfMerger - Entry point for python -m pdfmerger

This module allows the package to be run as a module:
    python -m pdfmerger
"""

import sys

from pdfmerger import main

if __name__ == "__main__":
    sys.exit(main())
