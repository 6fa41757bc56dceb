import os
import pytest
import sys
from pathlib import Path

# Run Qt headless so the suite works without a display server
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PIL import Image

# Add src to sys.path so we can import folio_layout
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from folio_layout.core.models import Item, ItemKind


# Common test fixtures
@pytest.fixture
def item_factory():
    """Factory to create items with sequential ids."""
    counter = {"n": 0}

    def _create(
        width: int = 100,
        height: int = 100,
        page: int = 1,
        x: float = 0,
        y: float = 0,
        item_id: str | None = None,
        kind: ItemKind = ItemKind.IMAGE,
    ) -> Item:
        counter["n"] += 1
        return Item(
            id=item_id or f"item{counter['n']}",
            x=x,
            y=y,
            width=width,
            height=height,
            page=page,
            kind=kind,
        )
    return _create


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple 400x200 test image."""
    img = Image.new("RGB", (400, 200), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
