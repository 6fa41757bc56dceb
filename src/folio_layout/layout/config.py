"""
Module: layout.config

Purpose:
    Configuration for the page layout engine.
    Defines page dimensions, page stacking, padding and packing gaps.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)
    - layout.geometry: A4 page height, CanvasGeometry

Used By:
    - layout.orchestrator: Auto-layout passes
    - layout.reconciler: Drag-end reconciliation
    - store.document_store: Shared geometry
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from .geometry import CanvasGeometry, page_height


DEFAULT_TOTAL_PAGES = 3
DEFAULT_PAGE_WIDTH_PX = 600
DEFAULT_PAGE_GAP_PX = 50
# Width of the auxiliary area beside the page stack
DEFAULT_CANVAS_MARGIN_WIDTH_PX = 600


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    Controls page geometry and the spacing used by shelf packing.
    Changing the configuration never re-lays-out existing items; that
    only happens when an auto-layout is triggered.

    Attributes:
        page_width: Page width in pixels (height follows A4 ratio)
        total_pages: Number of pages in the document
        page_gap: Vertical gap between stacked pages
        canvas_margin_width: Width reserved beside the pages for overflow
        page_padding: Inset from every page edge for auto-placed items
        item_gap: Horizontal gap between items in a row
        row_gap: Vertical gap between rows
        overflow_offset: Distance from the page's right edge to the
            first overflow column

    Example:
        >>> config = LayoutConfig()
        >>> config.page_height
        849
        >>> config.content_width
        580
        >>> config.overflow_width()
        580
    """

    # Page stack
    page_width: int = DEFAULT_PAGE_WIDTH_PX
    total_pages: int = DEFAULT_TOTAL_PAGES
    page_gap: int = DEFAULT_PAGE_GAP_PX
    canvas_margin_width: int = DEFAULT_CANVAS_MARGIN_WIDTH_PX

    # Packing
    page_padding: int = 10
    item_gap: int = 5
    row_gap: int = 5
    overflow_offset: int = 20

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.total_pages < 1:
            raise ValueError(f"total_pages must be >= 1: {self.total_pages}")
        for name in ("page_gap", "canvas_margin_width", "page_padding",
                     "item_gap", "row_gap", "overflow_offset"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0: {value}")
        if self.content_width <= 0:
            raise ValueError("Padding exceeds page width")

    # ─────────────────────────────────────────────────────────────────────────
    # Derived geometry
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def page_height(self) -> int:
        """Page height in pixels (A4 proportion of page_width)."""
        return page_height(self.page_width)

    @property
    def content_width(self) -> int:
        """Width available for items inside the page padding."""
        return self.page_width - 2 * self.page_padding

    @property
    def margin_budget(self) -> int:
        """Horizontal extent of one page plus its auxiliary area."""
        return self.page_width + self.canvas_margin_width

    def overflow_width(self, page_width: float | None = None) -> float:
        """
        Width available for overflow rows beside a page.

        Args:
            page_width: Live page width; defaults to the configured width
        """
        width = self.page_width if page_width is None else page_width
        return self.margin_budget - width - self.overflow_offset

    @property
    def geometry(self) -> CanvasGeometry:
        return CanvasGeometry(
            page_width=self.page_width,
            page_height=self.page_height,
            gap=self.page_gap,
            page_count=self.total_pages,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Copies & serialization
    # ─────────────────────────────────────────────────────────────────────────

    def with_changes(self, **changes: Any) -> LayoutConfig:
        """Return a validated copy with some fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LayoutConfig:
        """
        Build a config from a dictionary, ignoring unknown keys.

        Missing keys take their defaults.
        """
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
