"""
POS Catalog Engine — Test Suite
=================================
Tests for: lookup, listing, search, price filter, statistics and
stock mutations of the shared Catalog.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.commands.rejection import ReasonCode
from core.events import EventLevel, InMemoryEventSink
from core.primitives import Product
from core.time import FixedClock
from engines.catalog import Catalog, build_seeded_catalog, initial_products
from engines.catalog.events import (
    CATALOG_LOADED_V1,
    CATALOG_PRODUCT_NOT_FOUND_V1,
    CATALOG_SEARCH_DEGENERATE_V1,
    CATALOG_STOCK_REDUCED_V1,
    CATALOG_STOCK_REJECTED_V1,
    CATALOG_STOCK_RESTORED_V1,
)

NOW = datetime(2026, 2, 18, 12, 0, 0, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════
# TEST HELPERS
# ══════════════════════════════════════════════════════════════

def make_catalog(*products, sink=None):
    products = products or (
        Product(id=1, name="Widget", unit_price="10.00", available_stock=5),
        Product(id=2, name="Gadget Pro", unit_price="25.50", available_stock=0),
        Product(id=3, name="Big Widget", unit_price="100.00", available_stock=2),
    )
    return Catalog(
        products,
        event_sink=sink if sink is not None else InMemoryEventSink(),
        clock=FixedClock(NOW),
    )


# ══════════════════════════════════════════════════════════════
# CONSTRUCTION
# ══════════════════════════════════════════════════════════════

class TestCatalogConstruction:
    def test_loaded_event(self):
        sink = InMemoryEventSink()
        make_catalog(sink=sink)
        loaded = sink.of_type(CATALOG_LOADED_V1)
        assert loaded[0].payload == {"product_count": 3}

    def test_duplicate_ids_rejected(self):
        widget = Product(id=1, name="Widget", unit_price="1", available_stock=1)
        with pytest.raises(ValueError):
            Catalog([widget, widget])

    def test_non_product_rejected(self):
        with pytest.raises(ValueError):
            Catalog([{"id": 1}])

    def test_seed(self):
        products = initial_products()
        assert len(products) == 15
        assert products[0].name == "Smartphone Samsung Galaxy"
        assert products[0].unit_price == Decimal("899.99")
        catalog = build_seeded_catalog(event_sink=InMemoryEventSink())
        assert len(catalog) == 15
        assert catalog.get(12).available_stock == 5


# ══════════════════════════════════════════════════════════════
# READS
# ══════════════════════════════════════════════════════════════

class TestCatalogReads:
    def test_lookup(self):
        catalog = make_catalog()
        assert catalog.lookup(1).value.name == "Widget"

    def test_lookup_missing_emits_warning(self):
        sink = InMemoryEventSink()
        catalog = make_catalog(sink=sink)
        outcome = catalog.lookup(99)
        assert outcome.code == ReasonCode.PRODUCT_NOT_FOUND
        record = sink.of_type(CATALOG_PRODUCT_NOT_FOUND_V1)[0]
        assert record.level == EventLevel.WARNING

    def test_has_sufficient_stock(self):
        catalog = make_catalog()
        assert catalog.has_sufficient_stock(1, 5)
        assert not catalog.has_sufficient_stock(1, 6)
        assert not catalog.has_sufficient_stock(99, 1)

    def test_list_available_skips_out_of_stock(self):
        catalog = make_catalog()
        assert [p.id for p in catalog.list_available()] == [1, 3]
        assert catalog.available_ids() == (1, 3)
        assert len(catalog.list_all()) == 3

    def test_search_is_case_insensitive_and_ordered(self):
        result = make_catalog().search("  WIDGET ")
        assert [p.id for p in result] == [1, 3]
        assert result.term == "WIDGET"
        assert not result.is_degenerate

    def test_search_includes_out_of_stock(self):
        assert [p.id for p in make_catalog().search("gadget")] == [2]

    def test_blank_search_is_degenerate(self):
        sink = InMemoryEventSink()
        result = make_catalog(sink=sink).search("   ")
        assert result.is_degenerate
        assert len(result) == 0
        assert sink.of_type(CATALOG_SEARCH_DEGENERATE_V1)

    def test_price_filter_inclusive(self):
        outcome = make_catalog().filter_by_price_range("10.00", "25.50")
        assert [p.id for p in outcome.value] == [1, 2]

    @pytest.mark.parametrize("low,high", [
        ("50", "10"), ("-1", "10"), ("abc", "10"), (None, "10"),
    ])
    def test_price_filter_invalid_range(self, low, high):
        outcome = make_catalog().filter_by_price_range(low, high)
        assert outcome.code == ReasonCode.INVALID_RANGE

    def test_statistics(self):
        stats = make_catalog().statistics()
        assert stats["product_count"] == 3
        assert stats["available_count"] == 2
        assert stats["out_of_stock_count"] == 1
        assert stats["inventory_value"] == Decimal("250.00")
        assert stats["total_stock"] == 7
        assert stats["average_price"] == Decimal("135.50") / 3

    def test_statistics_of_empty_catalog(self):
        stats = Catalog([], event_sink=InMemoryEventSink()).statistics()
        assert stats["average_price"] is None
        assert stats["product_count"] == 0


# ══════════════════════════════════════════════════════════════
# STOCK MUTATIONS
# ══════════════════════════════════════════════════════════════

class TestStockMutations:
    def test_reduce_and_restore(self):
        sink = InMemoryEventSink()
        catalog = make_catalog(sink=sink)

        reduced = catalog.reduce_stock(1, 3)
        assert reduced.value.available_stock == 2
        assert catalog.get(1).available_stock == 2

        restored = catalog.restore_stock(1, 3)
        assert restored.value.available_stock == 5

        reduced_event = sink.of_type(CATALOG_STOCK_REDUCED_V1)[0]
        assert reduced_event.payload["previous_stock"] == 5
        assert reduced_event.payload["new_stock"] == 2
        assert "5 -> 2" in reduced_event.message
        assert sink.of_type(CATALOG_STOCK_RESTORED_V1)

    def test_reduce_to_zero(self):
        catalog = make_catalog()
        assert catalog.reduce_stock(3, 2).is_accepted
        assert catalog.available_ids() == (1,)

    def test_insufficient_stock_changes_nothing(self):
        sink = InMemoryEventSink()
        catalog = make_catalog(sink=sink)
        outcome = catalog.reduce_stock(1, 6)
        assert outcome.code == ReasonCode.INSUFFICIENT_STOCK
        assert outcome.reason.details["available"] == 5
        assert outcome.reason.details["requested"] == 6
        assert catalog.get(1).available_stock == 5
        assert sink.of_type(CATALOG_STOCK_REJECTED_V1)[0].level == EventLevel.ERROR

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
    def test_invalid_quantity(self, quantity):
        catalog = make_catalog()
        assert catalog.reduce_stock(1, quantity).code == ReasonCode.INVALID_QUANTITY
        assert catalog.restore_stock(1, quantity).code == ReasonCode.INVALID_QUANTITY

    def test_unknown_product(self):
        catalog = make_catalog()
        assert catalog.reduce_stock(99, 1).code == ReasonCode.PRODUCT_NOT_FOUND
        assert catalog.restore_stock(99, 1).code == ReasonCode.PRODUCT_NOT_FOUND

    def test_snapshot_is_a_copy(self):
        catalog = make_catalog()
        snapshot = catalog.stock_snapshot()
        snapshot[1] = 0
        assert catalog.get(1).available_stock == 5
        assert 1 in catalog
        assert 99 not in catalog
