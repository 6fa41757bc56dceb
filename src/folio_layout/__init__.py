"""Top-level package for the Folio layout editor engine.

Provides subpackages:
- folio_layout.core – item model, serialization and schema validation
- folio_layout.layout – page geometry, shelf packing and auto-layout
- folio_layout.store – the shared document store and its repositories
- folio_layout.images – image-backed item creation
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text().splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("folio-layout")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
