"""
POS Documents - Renderer Public API
=====================================
"""

from core.documents.renderer.text_renderer import (
    format_money,
    render_cart,
    render_catalog,
    render_inventory_summary,
    render_invoice,
    render_product_row,
    render_search_results,
)

__all__ = [
    "format_money",
    "render_cart",
    "render_catalog",
    "render_inventory_summary",
    "render_invoice",
    "render_product_row",
    "render_search_results",
]
