"""
Centralized settings and path configuration for the notes store.
"""
import logging
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to default if unset or invalid."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer, using %d", name, raw, default)
        return default


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    # Walk up from this file to find the project root
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Catalog file (products + bundle)
    catalog_path: Path

    # Overrides the bundle id declared in the catalog file
    bundle_id: Optional[str] = None

    # Starting value of the "students helped" counter
    students_helped: int = 842

    currency: str = 'SGD'

    # Filter tabs shown by the storefront
    filter_categories: tuple = (
        'All',
        'Year 1',
        'Year 2',
        'Year 3',
        'Year 4',
        'Prescribed Elective',
        'Design Elective',
        'Technical Elective',
        'Others',
    )

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()

        default_catalog = Path(__file__).resolve().parent.parent / 'data' / 'products.json'
        catalog_env = os.getenv('NOTES_STORE_CATALOG')

        return cls(
            project_root=root,
            catalog_path=Path(catalog_env) if catalog_env else default_catalog,
            bundle_id=os.getenv('NOTES_STORE_BUNDLE_ID') or None,
            students_helped=_env_int('NOTES_STORE_STUDENTS_HELPED', 842),
            currency=os.getenv('NOTES_STORE_CURRENCY', 'SGD'),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
