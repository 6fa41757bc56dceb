"""
Module: layout.geometry

Purpose:
    Coordinate model for the stacked multi-page canvas.
    Pages sit in a single vertical column separated by a fixed gap; a
    "global" Y runs continuously from the top of page 1, a "local" Y is
    relative to the top of one page.

Key Functions:
    - page_height(): A4-proportioned height for a page width
    - total_canvas_height(): Height of the full page stack
    - page_origin_y(): Global Y of a page's top edge
    - page_from_global_y(): Page containing a global Y (clamped)
    - local_y(): Global Y expressed relative to a page
    - mm_to_px() / px_to_mm(): 96 DPI unit conversion

Key Classes:
    - CanvasGeometry: Derived page-stack geometry

Dependencies:
    - dataclasses (std)
    - math (std)

Used By:
    - layout.config: Derived page height
    - layout.orchestrator: Page bounds during auto-layout
    - layout.reconciler: Drag-end page retargeting
"""

from __future__ import annotations

import math
from dataclasses import dataclass


# A4 paper in millimetres
A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297

# Screen DPI used for mm <-> px conversion
SCREEN_DPI = 96
MM_PER_INCH = 25.4


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


# ─────────────────────────────────────────────────────────────────────────────
# Unit Conversion
# ─────────────────────────────────────────────────────────────────────────────

def mm_to_px(mm: float) -> int:
    """Convert millimetres to whole screen pixels at 96 DPI."""
    return round_half_up(mm * (SCREEN_DPI / MM_PER_INCH))


def px_to_mm(px: float) -> float:
    """Convert screen pixels to millimetres at 96 DPI (2 decimals)."""
    return round(px / (SCREEN_DPI / MM_PER_INCH), 2)


A4_WIDTH_PX = mm_to_px(A4_WIDTH_MM)
A4_HEIGHT_PX = mm_to_px(A4_HEIGHT_MM)


# ─────────────────────────────────────────────────────────────────────────────
# Page Stack Mapping
# ─────────────────────────────────────────────────────────────────────────────

def page_height(page_width_px: float) -> int:
    """
    Height of a page that keeps the A4 aspect ratio.

    Example:
        >>> page_height(600)
        849
    """
    return round_half_up(page_width_px * A4_HEIGHT_MM / A4_WIDTH_MM)


def total_canvas_height(page_count: int, page_height_px: float, gap_px: float) -> float:
    """Height of `page_count` pages stacked with `gap_px` between them."""
    return page_height_px * page_count + gap_px * max(page_count - 1, 0)


def page_origin_y(page_index: int, page_height_px: float, gap_px: float) -> float:
    """
    Global Y of the top edge of a page (1-based).

    Page 1 and anything below it start at 0.
    """
    if page_index <= 1:
        return 0
    return (page_height_px + gap_px) * (page_index - 1)


def page_from_global_y(
    y_global_px: float,
    page_height_px: float,
    gap_px: float,
    page_count: int,
) -> int:
    """
    Page index containing a global Y.

    The gap below a page belongs to that page. Input outside the stack is
    clamped to the first or last page; a valid index is always returned.

    Example:
        >>> page_from_global_y(720, 700, 50, 3)
        1
        >>> page_from_global_y(750, 700, 50, 3)
        2
    """
    spacing = page_height_px + gap_px
    page = math.floor(y_global_px / spacing) + 1
    return max(1, min(page, page_count))


def local_y(y_global_px: float, page_index: int, page_height_px: float, gap_px: float) -> float:
    """
    Express a global Y relative to the top of `page_index`.

    No range check: a page index that does not contain the point yields a
    negative value or one past the page height.
    """
    return y_global_px - page_origin_y(page_index, page_height_px, gap_px)


# ─────────────────────────────────────────────────────────────────────────────
# Derived Geometry
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CanvasGeometry:
    """
    Geometry of the stacked page canvas (immutable, derived).

    Recomputed whenever page-size configuration changes; owns no item
    state.

    Attributes:
        page_width: Page width in pixels
        page_height: Page height in pixels
        gap: Vertical gap between consecutive pages
        page_count: Number of pages in the document

    Example:
        >>> geom = CanvasGeometry(page_width=600, page_height=849, gap=50, page_count=3)
        >>> geom.total_height
        2647
        >>> geom.page_origin(2)
        899
    """

    page_width: float
    page_height: float
    gap: float
    page_count: int

    @classmethod
    def for_page_width(cls, page_width: float, gap: float, page_count: int) -> CanvasGeometry:
        """Build geometry whose page height follows the A4 ratio."""
        return cls(
            page_width=page_width,
            page_height=page_height(page_width),
            gap=gap,
            page_count=page_count,
        )

    @property
    def total_height(self) -> float:
        return total_canvas_height(self.page_count, self.page_height, self.gap)

    @property
    def page_spacing(self) -> float:
        """Distance between the tops of consecutive pages."""
        return self.page_height + self.gap

    def page_origin(self, page: int) -> float:
        return page_origin_y(page, self.page_height, self.gap)

    def page_at(self, y_global: float) -> int:
        return page_from_global_y(y_global, self.page_height, self.gap, self.page_count)

    def to_global(self, y_local: float, page: int) -> float:
        return y_local + self.page_origin(page)

    def to_local(self, y_global: float, page: int) -> float:
        return local_y(y_global, page, self.page_height, self.gap)

    def page_bounds(self, page: int) -> tuple[float, float, float, float]:
        """(left, top, right, bottom) of a page in global canvas pixels."""
        top = self.page_origin(page)
        return (0, top, self.page_width, top + self.page_height)

    def pages(self) -> range:
        """Valid page indices, 1-based."""
        return range(1, self.page_count + 1)
