"""
Module: items

Purpose:
    Provides the Item dataclass - a rectangular visual element (an image
    or an annotated shape) placed on one page of the document.

Key Functions:
    - Item.moved_to(x, y, page): Copy with a new position
    - Item.with_flags(...): Copy with new badge flags
    - Item.bounds: (left, top, right, bottom) in page-local pixels
    - Item.to_dict(): Serialize for JSON
    - Item.from_dict(data): Deserialize from JSON

Dependencies:
    - dataclasses (std)

Used By:
    - layout: Shelf packing and coordinate reconciliation
    - store: Document store and repositories
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


# Badge values an item may carry
ALLOWED_PERCENTAGES: tuple[int, ...] = (10, 15, 20, 40, 50)


class ItemKind(str, Enum):
    """Type of visual item."""
    IMAGE = "image"  # Product image loaded from a URL or file
    SHAPE = "shape"  # Annotated rectangle with editable text

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Item:
    """
    Visual item positioned on a page (immutable).

    Coordinates are page-local pixels: (0, 0) is the top-left corner of
    the item's page. Layout passes only ever change x, y and page; size,
    identity and flags are carried through untouched.

    Attributes:
        id: Opaque stable identifier
        x: Left edge, page-local pixels
        y: Top edge, page-local pixels
        width: Width in pixels (never altered by layout)
        height: Height in pixels (never altered by layout)
        page: Page index (1-based)
        kind: IMAGE or SHAPE
        image_url: Source of the image (images only)
        title: Display title
        brand: Product brand
        text: Label text (shapes only)
        has_border: Highlight badge
        percentages: Sorted tuple of percentage badges

    Invariants:
        - width > 0 and height > 0
        - page >= 1
        - percentages only contains ALLOWED_PERCENTAGES values

    Example:
        >>> item = Item(id="img-1", x=0, y=0, width=150, height=150)
        >>> item.moved_to(20, 40, 2).page
        2
    """

    id: str
    x: float
    y: float
    width: int
    height: int
    page: int = 1
    kind: ItemKind = ItemKind.IMAGE
    image_url: Optional[str] = None
    title: Optional[str] = None
    brand: Optional[str] = None
    text: Optional[str] = None
    has_border: bool = False
    percentages: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        """Validate item on construction."""
        if not self.id:
            raise ValueError("id must not be empty")
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")
        if self.page < 1:
            raise ValueError(f"page must be >= 1: {self.page}")
        unknown = set(self.percentages) - set(ALLOWED_PERCENTAGES)
        if unknown:
            raise ValueError(f"Unsupported percentage badges: {sorted(unknown)}")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def right(self) -> float:
        """Right edge (x + width)."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge (y + height)."""
        return self.y + self.height

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(left, top, right, bottom) in page-local pixels."""
        return (self.x, self.y, self.right, self.bottom)

    @property
    def is_shape(self) -> bool:
        return self.kind is ItemKind.SHAPE

    # ─────────────────────────────────────────────────────────────────────────
    # Copies
    # ─────────────────────────────────────────────────────────────────────────

    def moved_to(self, x: float, y: float, page: Optional[int] = None) -> Item:
        """
        Return a copy at a new position.

        Args:
            x: New page-local x
            y: New page-local y
            page: New page index, or None to keep the current page

        Returns:
            New Item with identical size and flags
        """
        return replace(self, x=x, y=y, page=self.page if page is None else page)

    def with_border(self, has_border: bool) -> Item:
        return replace(self, has_border=has_border)

    def with_percentage_toggled(self, percentage: int) -> Item:
        """
        Return a copy with one percentage badge switched on or off.

        Raises:
            ValueError: If percentage is not an allowed badge
        """
        if percentage not in ALLOWED_PERCENTAGES:
            raise ValueError(f"Unsupported percentage badge: {percentage}")
        current = set(self.percentages)
        current ^= {percentage}
        return replace(self, percentages=tuple(sorted(current)))

    def with_text(self, text: str) -> Item:
        return replace(self, text=text)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Optional fields are omitted when unset.
        """
        d: dict = {
            "id": self.id,
            "kind": self.kind.value,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "page": self.page,
        }
        for key in ("image_url", "title", "brand", "text"):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        if self.has_border:
            d["has_border"] = True
        if self.percentages:
            d["percentages"] = list(self.percentages)
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Item:
        """
        Deserialize from dictionary.

        A missing or zero page falls back to page 1.
        """
        return cls(
            id=str(data["id"]),
            x=data.get("x", 0),
            y=data.get("y", 0),
            width=data["width"],
            height=data["height"],
            page=data.get("page") or 1,
            kind=ItemKind(data.get("kind", ItemKind.IMAGE.value)),
            image_url=data.get("image_url"),
            title=data.get("title"),
            brand=data.get("brand"),
            text=data.get("text"),
            has_border=bool(data.get("has_border", False)),
            percentages=tuple(sorted(data.get("percentages", ()))),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Item({self.id!r}, p{self.page} @ ({self.x}, {self.y}), {self.width}x{self.height})"
