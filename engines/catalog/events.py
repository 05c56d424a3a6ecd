"""
POS Catalog Engine — Event Types and Payload Builders
=======================================================
Engine: Catalog

Catalog builds payload only. Where events end up is the sink's concern.
"""

from __future__ import annotations

from decimal import Decimal

from core.primitives.product import Product


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

CATALOG_LOADED_V1 = "catalog.catalog.loaded.v1"
CATALOG_STOCK_REDUCED_V1 = "catalog.stock.reduced.v1"
CATALOG_STOCK_RESTORED_V1 = "catalog.stock.restored.v1"
CATALOG_STOCK_REJECTED_V1 = "catalog.stock.rejected.v1"
CATALOG_PRODUCT_NOT_FOUND_V1 = "catalog.product.not_found.v1"
CATALOG_PRODUCTS_LISTED_V1 = "catalog.products.listed.v1"
CATALOG_SEARCH_COMPLETED_V1 = "catalog.search.completed.v1"
CATALOG_SEARCH_DEGENERATE_V1 = "catalog.search.degenerate.v1"
CATALOG_PRICE_FILTER_COMPLETED_V1 = "catalog.price_filter.completed.v1"
CATALOG_PRICE_FILTER_REJECTED_V1 = "catalog.price_filter.rejected.v1"

CATALOG_EVENT_TYPES = (
    CATALOG_LOADED_V1,
    CATALOG_STOCK_REDUCED_V1,
    CATALOG_STOCK_RESTORED_V1,
    CATALOG_STOCK_REJECTED_V1,
    CATALOG_PRODUCT_NOT_FOUND_V1,
    CATALOG_PRODUCTS_LISTED_V1,
    CATALOG_SEARCH_COMPLETED_V1,
    CATALOG_SEARCH_DEGENERATE_V1,
    CATALOG_PRICE_FILTER_COMPLETED_V1,
    CATALOG_PRICE_FILTER_REJECTED_V1,
)

# Events that describe a stock mutation (the inventory-change log).
CATALOG_MUTATION_EVENT_TYPES = (
    CATALOG_STOCK_REDUCED_V1,
    CATALOG_STOCK_RESTORED_V1,
)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def build_stock_changed_payload(
    before: Product, after: Product, quantity: int,
) -> dict:
    return {
        "product_id": after.id,
        "product_name": after.name,
        "quantity": quantity,
        "previous_stock": before.available_stock,
        "new_stock": after.available_stock,
    }


def build_stock_rejected_payload(
    product_id: int, quantity: int, rejection_code: str,
    available: int | None = None,
) -> dict:
    return {
        "product_id": product_id,
        "quantity": quantity,
        "rejection_code": rejection_code,
        "available": available,
    }


def build_search_payload(term: str, result_count: int) -> dict:
    return {"term": term, "result_count": result_count}


def build_price_filter_payload(
    min_price: Decimal | str, max_price: Decimal | str, result_count: int | None,
) -> dict:
    return {
        "min_price": str(min_price),
        "max_price": str(max_price),
        "result_count": result_count,
    }


def stock_change_message(before: Product, after: Product) -> str:
    return (
        f"INVENTARIO - Producto ID:{after.id} '{after.name}': "
        f"{before.available_stock} -> {after.available_stock}"
    )
