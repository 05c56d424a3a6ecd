"""
POS Documents - Public API
==========================
Invoice numbering and plain-text rendering.
"""

from core.documents.numbering import (
    NumberingPolicy,
    NumberingProvider,
    RandomNumberingProvider,
    SequentialNumberingProvider,
)
from core.documents.renderer import (
    format_money,
    render_cart,
    render_catalog,
    render_inventory_summary,
    render_invoice,
)

__all__ = [
    "NumberingPolicy",
    "NumberingProvider",
    "RandomNumberingProvider",
    "SequentialNumberingProvider",
    "format_money",
    "render_cart",
    "render_catalog",
    "render_inventory_summary",
    "render_invoice",
]
