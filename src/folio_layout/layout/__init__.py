"""
Module: layout

Purpose:
    Pagination and automatic placement engine.
    Maps the stacked multi-page canvas to per-page coordinates and
    re-packs items into rows with overflow beside the page.

Key Functions:
    - auto_layout_page(): Re-pack a single page
    - auto_layout_all_pages(): Re-pack every page
    - reconcile_drag(): Retarget a dragged item to the page it was dropped on
    - shelve() / fit_shelves() / pack_overflow(): Packing steps

Key Classes:
    - LayoutConfig: Page geometry and spacing
    - CanvasGeometry: Derived page-stack geometry
    - LayoutMode: Sort heuristic cycled by repeated auto-layout
    - LayoutResult: Updated items plus placement diagnostics

Used By:
    - store.document_store: Shared document aggregate
    - cli: Command line entry point
"""

from .config import LayoutConfig
from .geometry import (
    CanvasGeometry,
    local_y,
    mm_to_px,
    page_from_global_y,
    page_height,
    page_origin_y,
    px_to_mm,
    total_canvas_height,
)
from .models import LayoutMode, LayoutResult, PageOutcome, Shelf
from .shelving import FitResult, PlacedShelf, fit_shelves, pack_overflow, shelve
from .orchestrator import auto_layout_all_pages, auto_layout_page, items_for_page
from .reconciler import reconcile_drag
from .collision import colliding_items, has_collision

__all__ = [
    # Config
    "LayoutConfig",
    # Geometry
    "CanvasGeometry",
    "page_height",
    "total_canvas_height",
    "page_origin_y",
    "page_from_global_y",
    "local_y",
    "mm_to_px",
    "px_to_mm",
    # Models
    "LayoutMode",
    "LayoutResult",
    "PageOutcome",
    "Shelf",
    "FitResult",
    "PlacedShelf",
    # Functions
    "shelve",
    "fit_shelves",
    "pack_overflow",
    "auto_layout_page",
    "auto_layout_all_pages",
    "items_for_page",
    "reconcile_drag",
    "has_collision",
    "colliding_items",
]
