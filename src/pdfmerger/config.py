"""
PdfMerger - Configuration Module

This module contains all configuration constants and paths used by the application.
"""

import logging
import os
from typing import Final

from pdfmerger.utils.i18n import _

# ============================================================================
# Application Constants
# ============================================================================

APP_NAME: Final[str] = "PDF Merger"
APP_VERSION: Final[str] = "1.0.0"
APP_DESCRIPTION: Final[str] = _("Combine, reorder and rotate pages from several PDF files")


# ============================================================================
# Configuration Directory
# ============================================================================

CONFIG_DIR: Final[str] = os.path.expanduser("~/.config/pdfmerger")
PREFERENCES_PATH: Final[str] = os.path.join(CONFIG_DIR, "preferences.json")


# ============================================================================
# Logging Configuration
# ============================================================================

LOG_LEVEL: int = logging.INFO
LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME: Final[str] = "PdfMerger"


# ============================================================================
# Document Constants
# ============================================================================

# Extensions accepted when loading a batch of files
PDF_EXTENSIONS: Final[tuple[str, ...]] = (".pdf",)

# Rotation steps a page may take, in degrees
VALID_ROTATIONS: Final[tuple[int, ...]] = (0, 90, 180, 270)
ROTATION_STEP: Final[int] = 90

DEFAULT_OUTPUT_NAME: Final[str] = "merged.pdf"


# ============================================================================
# Thumbnail Configuration
# ============================================================================

THUMBNAIL_SCALE: Final[float] = 0.5
THUMBNAIL_CACHE_SIZE: Final[int] = 200
THUMBNAIL_FILENAME_PATTERN: Final[str] = "page-{position:03d}.png"
