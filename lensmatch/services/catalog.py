"""
Lens Price Catalog

Loads the brand-scoped lens price catalog from JSON. The catalog is static
configuration: it is read once per process and handed to the matcher
explicitly.

File layout::

    {
      "brand": "...",
      "single_vision": {"Minus Comp": [...], "Plus Comp": [...], "SV Cross Comp": [...]},
      "CYL_KT": [...], "COMP_KT": [...], "Bifocal KT": [...],
      "PROGRESSIVE_SPH": [...], "PROGRESSIVE__CYL": [...], "PROGRESSIVE_COMP": [...]
    }

Each row is ``{"range": "<label>", "<COATING_CODE>": <price or "-">, ...}``;
key order inside a row is kept as authored.
"""

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

from lensmatch.config import settings
from lensmatch.services.lens_policy import SINGLE_VISION

log = logging.getLogger(__name__)

NOT_OFFERED = "-"
RANGE_KEY = "range"


class CatalogError(Exception):
    """Raised when the catalog file is missing or malformed."""


@dataclass(frozen=True)
class Catalog:
    """Read-only lens price catalog for one brand."""
    brand: str
    single_vision: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)
    categories: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)

    def rows(self, category: str) -> List[Dict[str, Any]]:
        """Rows of a top-level category, empty when the brand lacks it."""
        return self.categories.get(category, [])

    def single_vision_rows(self, subcategory: str) -> List[Dict[str, Any]]:
        return self.single_vision.get(subcategory, [])

    def summary(self) -> Dict[str, Any]:
        return {
            "brand": self.brand,
            "single_vision": {k: len(v) for k, v in self.single_vision.items()},
            "categories": {k: len(v) for k, v in self.categories.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Catalog":
        if not isinstance(data, dict):
            raise CatalogError("catalog root must be an object")
        brand = data.get("brand")
        if not brand or not isinstance(brand, str):
            raise CatalogError("catalog is missing 'brand'")

        sv_data = data.get(SINGLE_VISION)
        if sv_data is None:
            sv_data = {}
        if not isinstance(sv_data, dict):
            raise CatalogError(f"'{SINGLE_VISION}' must map subcategories to row lists")
        single_vision = {
            name: _validate_rows(f"{SINGLE_VISION}.{name}", rows)
            for name, rows in sv_data.items()
        }

        categories = {
            name: _validate_rows(name, rows)
            for name, rows in data.items()
            if name not in ("brand", SINGLE_VISION)
        }
        return cls(brand=brand, single_vision=single_vision, categories=categories)


def _validate_rows(name: str, rows: Any) -> List[Dict[str, Any]]:
    if not isinstance(rows, list):
        raise CatalogError(f"category '{name}' must be a list of rows")
    validated = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            raise CatalogError(f"{name}[{i}] is not an object")
        label = row.get(RANGE_KEY)
        if not isinstance(label, str) or not label.strip():
            raise CatalogError(f"{name}[{i}] has no 'range' label")
        for code, price in row.items():
            if code == RANGE_KEY:
                continue
            if price is None or price == NOT_OFFERED:
                continue
            if isinstance(price, bool) or not isinstance(price, (int, float)):
                raise CatalogError(f"{name}[{i}] '{code}' price must be a number or '{NOT_OFFERED}', got {price!r}")
        validated.append(dict(row))
    return validated


def load_catalog(path: str | Path) -> Catalog:
    """Load and validate a catalog JSON file."""
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise CatalogError(f"catalog file not found: {p}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"catalog file is not valid JSON: {p}: {e}") from e

    catalog = Catalog.from_dict(data)
    total = sum(len(r) for r in catalog.single_vision.values()) + sum(len(r) for r in catalog.categories.values())
    log.info("Catalog loaded for %s from %s - %d rows", catalog.brand, p, total)
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    """Get the process-wide catalog loaded from settings.catalog_path."""
    return load_catalog(settings.catalog_path)
