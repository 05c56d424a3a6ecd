"""
POS Catalog Engine
===================
Products, stock and the queries the storefront runs against them.
"""

from engines.catalog.seed import build_seeded_catalog, initial_products
from engines.catalog.services import Catalog, SearchResult

__all__ = [
    "Catalog",
    "SearchResult",
    "build_seeded_catalog",
    "initial_products",
]
