"""
Catalog - Loads the product list and full-access bundle.

The catalog file is generated offline (one product per Drive folder) and
has the shape {"bundle": {...}, "products": [{...}, ...]}.
If it cannot be read the built-in sample catalog is used instead.
"""
import json
import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from ..config.settings import get_settings, Settings
from ..engine.models import Product


logger = logging.getLogger(__name__)

ALL_FILTER = "All"

SAMPLE_BUNDLE = {
    "id": "dabao-full-access",
    "code": "DABAO",
    "name": "DaBao Full Access",
    "description": "Every set of notes in the store, including future uploads.",
    "price": 89.0,
    "category": "Note",
    "tags": ["bundle", "full access"],
    "image": "",
    "filterCategory": "Others",
    "googleDriveId": "",
}

SAMPLE_PRODUCTS = [
    {
        "id": "cs101", "code": "CS101", "name": "Introduction to Programming",
        "description": "Python basics, control flow and functions.",
        "price": 10.0, "category": "Note", "tags": ["programming", "python"],
        "filterCategory": "Year 1",
    },
    {
        "id": "ma101", "code": "MA101", "name": "Calculus I",
        "description": "Limits, derivatives and integrals with worked examples.",
        "price": 10.0, "category": "Note", "tags": ["math"],
        "filterCategory": "Year 1",
    },
    {
        "id": "tool-formula", "code": "TOOL01", "name": "Formula Sheet Pack",
        "description": "Printable exam formula sheets.",
        "price": 15.0, "category": "Tool", "tags": ["exam"],
        "filterCategory": "Others",
    },
]

PRODUCT_COLUMNS = ['id', 'code', 'name', 'description', 'price', 'category',
                   'tags', 'image', 'filterCategory', 'googleDriveId']


def _to_record(product: Product) -> dict:
    """Product as a catalog row (camelCase keys, as written by the catalog build)."""
    return {
        'id': product.id,
        'code': product.code,
        'name': product.name,
        'description': product.description,
        'price': product.price,
        'category': product.category,
        'tags': product.tags,
        'image': product.image,
        'filterCategory': product.filter_category,
        'googleDriveId': product.google_drive_id,
    }


class Catalog:
    """Product list plus the optional bundle product."""

    def __init__(self, products: list[dict], bundle: Optional[dict] = None, bundle_id: Optional[str] = None):
        # Normalize camelCase and snake_case records to one column layout
        records = [_to_record(Product.from_dict(p)) for p in products]
        frame = pd.DataFrame(records, columns=PRODUCT_COLUMNS)
        frame['id'] = frame['id'].astype(str).str.strip()
        frame = frame.drop_duplicates('id').copy()

        self.bundle = Product.from_dict(bundle) if bundle else None
        if self.bundle and bundle_id:
            self.bundle.id = bundle_id
        elif bundle_id:
            # No bundle record: the configured id names a listed product
            if bundle_id in frame['id'].values:
                self.bundle = self._to_products(frame[frame['id'] == bundle_id])[0]
                frame = frame[frame['id'] != bundle_id].copy()
            else:
                logger.warning("Bundle id %s not found in catalog, bundle pricing disabled", bundle_id)

        self.frame = frame.set_index('id', drop=False)

    @property
    def bundle_id(self) -> Optional[str]:
        return self.bundle.id if self.bundle else None

    @property
    def products(self) -> list[Product]:
        return self._to_products(self.frame)

    def _to_products(self, frame: pd.DataFrame) -> list[Product]:
        records = frame.astype(object).where(frame.notna(), None).to_dict(orient='records')
        return [Product.from_dict(r) for r in records]

    def get(self, product_id: str) -> Optional[Product]:
        """Look up a product by id; the bundle is included."""
        product_id = str(product_id).strip()
        if self.bundle and product_id == self.bundle.id:
            return self.bundle
        if product_id not in self.frame.index:
            return None
        return self._to_products(self.frame.loc[[product_id]])[0]

    def filter(self, filter_category: str = ALL_FILTER, query: str = "") -> list[Product]:
        """
        Filter products by tab and search text.

        The search is a case-insensitive substring match on name or code.
        """
        df = self.frame
        if filter_category and filter_category != ALL_FILTER:
            df = df[df['filterCategory'] == filter_category]

        query = (query or "").strip()
        if query:
            mask = (
                df['name'].str.contains(query, case=False, regex=False, na=False) |
                df['code'].str.contains(query, case=False, regex=False, na=False)
            )
            df = df[mask]

        return self._to_products(df)

    def __len__(self) -> int:
        return len(self.frame)


def sample_catalog(bundle_id: Optional[str] = None) -> Catalog:
    """The built-in catalog used when no catalog file is available."""
    return Catalog(SAMPLE_PRODUCTS, SAMPLE_BUNDLE, bundle_id=bundle_id)


def load_catalog(path: Optional[Path] = None, settings: Optional[Settings] = None) -> Catalog:
    """
    Load the catalog from JSON.

    Args:
        path: Catalog file; defaults to settings.catalog_path
        settings: Optional settings override

    Returns:
        Catalog (sample catalog if the file is missing or unreadable)
    """
    settings = settings or get_settings()
    path = Path(path or settings.catalog_path)

    if not path.exists():
        logger.warning("Catalog file %s not found, using sample catalog", path)
        return sample_catalog(settings.bundle_id)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        # A bare list is a product list without a bundle
        if isinstance(data, list):
            data = {"products": data}

        catalog = Catalog(data.get('products', []), data.get('bundle'), bundle_id=settings.bundle_id)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.error("Failed to load catalog %s: %s", path, e)
        return sample_catalog(settings.bundle_id)

    logger.info("Loaded %d products from %s (bundle: %s)", len(catalog), path, catalog.bundle_id)
    return catalog
