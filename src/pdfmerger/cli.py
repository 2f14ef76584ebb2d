#!/usr/bin/env python3
"""
PdfMerger CLI - combine pages from several PDFs from the terminal.

Usage:
    python -m pdfmerger <command> [options]

Commands:
    merge       Merge PDFs, optionally moving, rotating and deleting pages
    info        Show page count, size and page rotations
    thumbnails  Render one PNG thumbnail per page

Examples:
    # Merge in the given order
    pdfmerger merge a.pdf b.pdf c.pdf -o merged.pdf

    # Move page 5 to the front, rotate pages 1 and 3, drop pages 7-9
    pdfmerger merge a.pdf b.pdf -o out.pdf --move 5:1 --rotate 1,3 --delete 7-9

    # Rotate page 2 by 180 degrees
    pdfmerger merge a.pdf -o out.pdf --rotate 2 --rotate 2

    # Thumbnails
    pdfmerger thumbnails a.pdf b.pdf -o thumbs/ --scale 0.3

Page numbers are 1-based positions in the merged sequence. Steps run in the
order moves, rotations, deletions; each step sees the result of the one
before it.
"""

import argparse
import logging
import sys
from pathlib import Path

from pdfmerger.config import APP_DESCRIPTION, APP_NAME, APP_VERSION
from pdfmerger.editor.page_collection import PageCollection
from pdfmerger.utils.exceptions import LoadError, PdfMergerError
from pdfmerger.utils.i18n import _
from pdfmerger.utils.logger import set_log_level
from pdfmerger.utils.preferences import get_preferences

# ---------------------------------------------------------------------------
# Page list parsers
# ---------------------------------------------------------------------------


def _parse_page_list(text: str) -> list[int]:
    """Parse a page specification string into a sorted list of page numbers.

    Supports: "3", "1-5", "1,3,7", "1-3,7,10-12"

    Args:
        text: Page specification string.

    Returns:
        Sorted list of 1-indexed page numbers.
    """
    pages: set[int] = set()
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            if "-" in part:
                start_s, end_s = part.split("-", 1)
                s, e = int(start_s.strip()), int(end_s.strip())
                pages.update(range(s, e + 1))
            else:
                pages.add(int(part))
        except ValueError:
            raise ValueError(
                f"Invalid page specification '{part}'. "
                "Use numbers and ranges like '1-5' or '1,3,7'."
            ) from None
    return sorted(p for p in pages if p >= 1)


def _parse_move(text: str) -> tuple[int, int]:
    """Parse a move specification "FROM:TO" into 1-indexed positions."""
    try:
        from_s, to_s = text.split(":", 1)
        move = int(from_s.strip()), int(to_s.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid move '{text}'. Use FROM:TO, for example 5:1."
        ) from None
    if move[0] < 1 or move[1] < 1:
        raise argparse.ArgumentTypeError(f"Invalid move '{text}'. Positions start at 1.")
    return move


# ---------------------------------------------------------------------------
# Collection helpers
# ---------------------------------------------------------------------------


def select_positions(collection: PageCollection, positions: list[int]) -> None:
    """Replace the selection with the pages at the given 1-indexed positions.

    Raises:
        IndexError: If a position is past the end of the collection.
    """
    collection.deselect_all()
    for position in positions:
        if position > len(collection):
            raise IndexError(
                f"Page {position} does not exist (the merged document has "
                f"{len(collection)} pages)"
            )
        collection.toggle_select(collection[position - 1].id)


def apply_edits(
    collection: PageCollection,
    moves: list[tuple[int, int]],
    rotations: list[str],
    deletions: str | None,
) -> None:
    """Apply moves, then rotations, then deletions to the collection."""
    for from_pos, to_pos in moves:
        collection.reorder(from_pos - 1, to_pos - 1)

    for pages in rotations:
        select_positions(collection, _parse_page_list(pages))
        collection.rotate_selected()

    if deletions:
        select_positions(collection, _parse_page_list(deletions))
        collection.delete_selected()

    collection.deselect_all()


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with subcommands."""
    p = argparse.ArgumentParser(
        prog="pdfmerger",
        description=APP_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-v", "--verbose", action="store_true", help=_("Verbose logging (DEBUG)"))
    p.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")

    sub = p.add_subparsers(dest="command", help=_("Available commands"))

    # --- merge ---
    merge_p = sub.add_parser("merge", help=_("Merge PDFs into one"))
    merge_p.add_argument("inputs", nargs="+", type=Path, help=_("Input PDF files (in order)"))
    merge_p.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help=_("Output PDF file (default from preferences, merged.pdf)"),
    )
    merge_p.add_argument(
        "--move",
        type=_parse_move,
        action="append",
        default=[],
        metavar="FROM:TO",
        help=_("Move the page at FROM to position TO (repeatable)"),
    )
    merge_p.add_argument(
        "--rotate",
        action="append",
        default=[],
        metavar="PAGES",
        help=_("Rotate pages 90° clockwise, e.g. '1,3' or '2-4' (repeatable)"),
    )
    merge_p.add_argument(
        "--delete",
        default=None,
        metavar="PAGES",
        help=_("Remove pages from the result, e.g. '2' or '5-7'"),
    )

    # --- info ---
    info_p = sub.add_parser("info", help=_("Show page count, size and rotations"))
    info_p.add_argument("inputs", nargs="+", type=Path, help=_("Input PDF files"))

    # --- thumbnails ---
    thumbs_p = sub.add_parser("thumbnails", help=_("Render one PNG per page"))
    thumbs_p.add_argument("inputs", nargs="+", type=Path, help=_("Input PDF files (in order)"))
    thumbs_p.add_argument(
        "-o", "--output", type=Path, required=True, help=_("Output directory")
    )
    thumbs_p.add_argument(
        "--scale",
        type=float,
        default=None,
        help=_("Render scale, 1.0 = 72 dpi (default from preferences, 0.5)"),
    )

    return p


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_merge(args, logger) -> int:
    """Handle the 'merge' command."""
    from pdfmerger.services.merge_exporter import MergeExporter

    output = args.output or Path(get_preferences().get("output.default_name", "merged.pdf"))

    collection = PageCollection()
    collection.load_files(args.inputs)
    if collection.is_empty:
        print(_("Error: no pages to merge"), file=sys.stderr)
        return 1

    try:
        apply_edits(collection, args.move, args.rotate, args.delete)
    except (IndexError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for position, page in enumerate(collection):
        logger.debug(f"{page.page_label(position)} {page.rotation_badge}: {page.to_dict()}")

    MergeExporter().export_to_file(collection.snapshot(), output)
    print(f"Merged: {len(collection)} pages from {len(collection.sources())} files → {output}")
    return 0


def _cmd_info(args, _logger) -> int:
    """Handle the 'info' command."""
    from pdfmerger.services.pdf_source import friendly_error, get_pdf_info

    for path in args.inputs:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise LoadError(path.name, friendly_error(e)) from e
        info = get_pdf_info(data, path.name)
        print(f"File:       {info.name}")
        print(f"Pages:      {info.page_count}")
        print(f"Size:       {info.size_mb:.2f} MB ({info.size_bytes:,} bytes)")
        print(f"Version:    PDF {info.pdf_version}")
        print(f"Encrypted:  {'Yes' if info.encrypted else 'No'}")
        if info.title:
            print(f"Title:      {info.title}")
        if info.author:
            print(f"Author:     {info.author}")
        rotated = [(i + 1, r) for i, r in enumerate(info.page_rotations) if r]
        if rotated:
            print("Rotated:    " + ", ".join(f"p{n}={r}°" for n, r in rotated))
    return 0


def _cmd_thumbnails(args, logger) -> int:
    """Handle the 'thumbnails' command."""
    from pdfmerger.editor.thumbnail_renderer import ThumbnailRenderer

    scale = args.scale
    if scale is None:
        try:
            scale = float(get_preferences().get("thumbnails.scale", 0.5))
        except (TypeError, ValueError):
            print(_("Error: thumbnails.scale in preferences is not a number"), file=sys.stderr)
            return 1
    if scale <= 0:
        print(_("Error: scale must be positive"), file=sys.stderr)
        return 1

    collection = PageCollection()
    collection.load_files(args.inputs)

    renderer = ThumbnailRenderer(default_scale=scale)
    try:
        written = renderer.save_thumbnails(collection, args.output)
    finally:
        renderer.clear_all(collection)

    print(f"Thumbnails: {len(written)} pages → {args.output}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.verbose:
        set_log_level(logging.DEBUG)
    logger = logging.getLogger("pdfmerger.cli")

    for path in args.inputs:
        if not path.exists():
            print(f"Error: {path} not found", file=sys.stderr)
            return 1

    handlers = {
        "merge": _cmd_merge,
        "info": _cmd_info,
        "thumbnails": _cmd_thumbnails,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args, logger)
    except PdfMergerError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
