"""
Command line entry point for editing layout documents.

Usage:
    folio-layout DOC info
    folio-layout DOC layout --page 2
    folio-layout DOC layout --all --mode height_desc
    folio-layout DOC move img-1 40 900
    folio-layout DOC add-image photo.png --page 1
    folio-layout DOC toggle-border img-1
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from folio_layout import __version__
from folio_layout.images import ImageNotFoundError, item_from_image
from folio_layout.layout import LayoutConfig, LayoutMode, LayoutResult
from folio_layout.store import DocumentStore, ItemNotFoundError, JsonFileRepository

logger = logging.getLogger("folio_layout")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="folio-layout",
        allow_abbrev=False,
        description="Inspect and auto-arrange items in a paged layout document",
    )
    parser.add_argument("document", type=Path, help="JSON layout document")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="More output (-vv for debug)")
    parser.add_argument("--page-width", type=int, help="Page width in pixels")
    parser.add_argument("--pages", type=int, help="Total number of pages")
    parser.add_argument("--gap", type=int, help="Gap between pages in pixels")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("info", help="Summarise pages and items")

    layout = sub.add_parser("layout", help="Auto-arrange items")
    target = layout.add_mutually_exclusive_group(required=True)
    target.add_argument("--page", type=int, help="Page to arrange (1-based)")
    target.add_argument("--all", action="store_true", help="Arrange every page")
    layout.add_argument("--mode", choices=[m.value for m in LayoutMode],
                        default=LayoutMode.INSERTION.value, help="Ordering before packing")

    move = sub.add_parser("move", help="Drop an item at page-local coordinates")
    move.add_argument("item_id")
    move.add_argument("x", type=float)
    move.add_argument("y", type=float, help="y relative to the item's current page")

    add = sub.add_parser("add-image", help="Add an image file as an item")
    add.add_argument("path", type=Path)
    add.add_argument("--page", type=int, default=1)
    add.add_argument("--id", dest="item_id")

    toggle = sub.add_parser("toggle-border", help="Toggle the highlight badge")
    toggle.add_argument("item_id")

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(message)s")


def _load_config(repository: JsonFileRepository, args: argparse.Namespace) -> LayoutConfig:
    """Stored geometry, overridden by command line flags."""
    config = LayoutConfig.from_dict(repository.config or {})
    overrides = {
        "page_width": args.page_width,
        "total_pages": args.pages,
        "page_gap": args.gap,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return config.with_changes(**overrides) if overrides else config


def _print_result(result: LayoutResult) -> None:
    for outcome in result.pages:
        print(
            f"page {outcome.page}: {len(outcome.placed)} placed, "
            f"{len(outcome.overflowed)} overflow, {len(outcome.unplaced)} unplaced"
        )
    for warning in result.warnings:
        print(f"warning: {warning}")


def run(args: argparse.Namespace) -> int:
    repository = JsonFileRepository(args.document)
    items = repository.load_all()
    if repository.load_error:
        # Refuse to run: any mutation would overwrite the unreadable file.
        logger.error(f"{repository.load_error} ({args.document})")
        return 1
    config = _load_config(repository, args)
    repository.config = config.to_dict()

    mode = LayoutMode(args.mode) if args.command == "layout" else LayoutMode.INSERTION
    store = DocumentStore(repository=repository, config=config, mode=mode, items=items)

    if args.command == "info":
        geometry = store.geometry
        print(f"{len(store.items)} items on {geometry.page_count} pages "
              f"({geometry.page_width}x{geometry.page_height}px, gap {geometry.gap}px)")
        for page in geometry.pages():
            count = store.visible_count(page, geometry.page_width, geometry.page_height)
            print(f"page {page}: {len(store.items_on_page(page))} items, {count} inside the page")
        return 0

    if args.command == "layout":
        if args.all:
            result = store.auto_layout_all_pages()
        else:
            result = store.auto_layout_page(args.page)
        _print_result(result)
        return 0

    if args.command == "move":
        item = store.drag_item(args.item_id, args.x, args.y)
        print(f"{item.id}: page {item.page} at ({item.x}, {item.y})")
        return 0

    if args.command == "add-image":
        item = store.add_item(item_from_image(args.path, item_id=args.item_id, page=args.page))
        print(f"added {item.id} ({item.width}x{item.height}) on page {item.page}")
        return 0

    if args.command == "toggle-border":
        item = store.toggle_border(args.item_id)
        print(f"{item.id}: border {'on' if item.has_border else 'off'}")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        return run(args)
    except (ItemNotFoundError, ImageNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
