from datetime import date
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func, select

from stockcore.core.numeric import to_decimal
from stockcore.db.models.catalog import Category, ProductFamily, ProductVariant
from stockcore.db.models.field_collections import Collection
from stockcore.db.models.inventory import InventoryLevel
from stockcore.db.models.procurements import Procurement, ProcurementItem, ProcurementStatus
from stockcore.db.models.sales import PaymentMethod, Sale
from stockcore.db.models.suppliers import Supplier
from stockcore.db.models.warehouses import Warehouse

CLOSED_STATUSES = (ProcurementStatus.RECEIVED, ProcurementStatus.CANCELLED)


async def _count(db: AsyncSession, column, *filters) -> int:
    return await db.scalar(select(func.count(column)).where(*filters)) or 0


async def _total(db: AsyncSession, stmt) -> Decimal:
    value = await db.scalar(stmt)
    return to_decimal(value) if value is not None else Decimal("0")


async def catalog_counts(db: AsyncSession) -> dict:
    return {
        "total_products": await _count(db, ProductVariant.id),
        "total_families": await _count(db, ProductFamily.id),
        "total_categories": await _count(db, Category.id),
        "total_warehouses": await _count(db, Warehouse.id),
        "total_suppliers": await _count(db, Supplier.id),
    }


async def inventory_figures(db: AsyncSession, low_stock_threshold: Decimal) -> dict:
    return {
        "total_skus": await _count(db, InventoryLevel.id),
        "low_stock_items": await _count(
            db,
            InventoryLevel.id,
            InventoryLevel.quantity > 0,
            InventoryLevel.quantity < low_stock_threshold,
        ),
        "out_of_stock_items": await _count(db, InventoryLevel.id, InventoryLevel.quantity <= 0),
        "inventory_value": await _total(
            db,
            select(func.sum(InventoryLevel.quantity * ProductVariant.cost_price))
            .join(ProductVariant, ProductVariant.id == InventoryLevel.variant_id),
        ),
    }


async def procurement_figures(db: AsyncSession, today: date) -> dict:
    open_order = Procurement.status.not_in(CLOSED_STATUSES)
    return {
        "active_procurements": await _count(db, Procurement.id, open_order),
        "pending_deliveries": await _count(
            db,
            Procurement.id,
            Procurement.status == ProcurementStatus.ORDERED,
            Procurement.expected_delivery.is_not(None),
        ),
        "overdue_procurements": await _count(
            db, Procurement.id, open_order, Procurement.expected_delivery < today
        ),
        "total_procurement_spend": await _total(
            db, select(func.sum(ProcurementItem.quantity_ordered * ProcurementItem.unit_cost))
        ),
        "total_collected_weight": await _total(db, select(func.sum(Collection.weight))),
    }


async def sales_figures(db: AsyncSession) -> dict:
    return {
        "total_sales_value": await _total(db, select(func.sum(Sale.total_amount))),
        "accounts_receivable": await _total(
            db,
            select(func.sum(Sale.total_amount)).where(Sale.payment_method == PaymentMethod.CREDIT),
        ),
    }
