"""Dashboard summary: counts and totals over the live tables."""

from datetime import date
from decimal import Decimal

from stockcore.db.models.sales import PaymentMethod
from stockcore.domain.dashboard.service import get_stats
from stockcore.domain.field_collections.schemas import CollectionCreate
from stockcore.domain.field_collections.service import record_collection
from stockcore.domain.procurement.schemas import ProcurementCreate, ProcurementLine
from stockcore.domain.procurement.service import create_procurement, update_status
from stockcore.domain.sales.schemas import SaleCreate, SaleLine
from stockcore.domain.sales.service import process_sale

USER_ID = 7
TODAY = date(2026, 3, 10)


def _order(seed, variant_id, qty, cost, expected_delivery=None):
    return ProcurementCreate(
        supplier_id=seed.supplier_id,
        warehouse_id=seed.main_warehouse_id,
        expected_delivery=expected_delivery,
        items=[ProcurementLine(variant_id=variant_id, quantity=Decimal(qty), unit_cost=Decimal(cost))],
    )


def _sale(seed, variant_id, qty, price, method):
    return SaleCreate(
        warehouse_id=seed.main_warehouse_id,
        payment_method=method,
        items=[SaleLine(variant_id=variant_id, quantity=Decimal(qty), unit_price=Decimal(price))],
    )


async def test_stats_on_seeded_catalog(db, seed):
    stats = await get_stats(db, TODAY)

    assert stats.total_products == 3
    assert stats.total_families == 2
    assert stats.total_categories == 1
    assert stats.total_warehouses == 2
    assert stats.total_suppliers == 1
    assert stats.total_skus == 0
    assert stats.inventory_value == Decimal("0.00")
    assert stats.total_sales_value == Decimal("0.00")
    assert stats.total_collected_weight == Decimal("0")


async def test_stats_reflect_activity(db, seed, stock):
    await stock(seed.main_warehouse_id, seed.milk_1l_id, 100)
    await stock(seed.main_warehouse_id, seed.milk_20l_id, 5)
    await stock(seed.store_warehouse_id, seed.rice_25kg_id, 3)
    await stock(seed.store_warehouse_id, seed.milk_1l_id, 0)

    await record_collection(
        db, CollectionCreate(variant_id=seed.milk_1l_id, supplier_id=seed.supplier_id, weight=Decimal("12.5")), USER_ID
    )
    await process_sale(db, _sale(seed, seed.milk_1l_id, "2", "1.20", PaymentMethod.CASH), USER_ID)
    await process_sale(db, _sale(seed, seed.milk_20l_id, "1", "22.00", PaymentMethod.CREDIT), USER_ID)

    await create_procurement(db, _order(seed, seed.milk_1l_id, "10", "0.80", date(2026, 3, 1)), USER_ID)
    ordered = await create_procurement(db, _order(seed, seed.milk_20l_id, "2", "15.00", date(2026, 4, 1)), USER_ID)
    await update_status(db, ordered.id, "ordered")
    cancelled = await create_procurement(db, _order(seed, seed.rice_25kg_id, "1", "20.00"), USER_ID)
    await update_status(db, cancelled.id, "cancelled")

    stats = await get_stats(db, TODAY)

    assert stats.total_skus == 4
    # the 20L cans and the rice sacks
    assert stats.low_stock_items == 2
    assert stats.out_of_stock_items == 1
    # 90.5 x 0.80 + 5 x 15.00, rice has no cost price
    assert stats.inventory_value == Decimal("147.40")

    assert stats.active_procurements == 2
    assert stats.pending_deliveries == 1
    assert stats.overdue_procurements == 1
    assert stats.total_procurement_spend == Decimal("58.00")
    assert stats.total_collected_weight == Decimal("12.5")

    assert stats.total_sales_value == Decimal("24.40")
    assert stats.accounts_receivable == Decimal("22.00")
