# stockcore/domain/sales/service.py
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from stockcore.core.exceptions import (
    InsufficientStockError,
    InvalidInputError,
    InvalidQuantityError,
    ProductVariantNotFoundError,
    SaleNotFoundError,
    WarehouseNotFoundError,
)
from stockcore.core.logging_config import get_logger
from stockcore.core.numeric import quantize_money, to_decimal
from stockcore.db.base import unit_of_work
from stockcore.db.models.sales import Sale, SaleItem
from stockcore.db.repositories.catalog import get_variant_by_id, get_warehouse_by_id
from stockcore.db.repositories.inventory import adjust_level, get_level
from stockcore.db.repositories.sales import get_sale_by_id, list_sales
from stockcore.domain.catalog.units import resolve_for_variant
from .schemas import SaleCreate

logger = get_logger("services.sales")

def calculate_totals(
    sale: Sale,
) -> Sale:
    """Fill in each line total and the sale total.

    total = sum(quantity * unit_price) + tax - discount
    """
    subtotal = Decimal("0")
    for item in sale.items:
        item.line_total = quantize_money(to_decimal(item.quantity) * to_decimal(item.unit_price))
        subtotal += item.line_total
    sale.total_amount = quantize_money(
        subtotal + to_decimal(sale.tax_amount or 0) - to_decimal(sale.discount_amount or 0)
    )
    return sale

async def process_sale(
    db: AsyncSession,
    data: SaleCreate,
    processed_by_user_id: int,
) -> Sale:
    """Record a sale and deduct its stock, all or nothing.

    Each line is resolved to its family's base unit first. Deductions that
    land on the same base variant are summed, every resulting amount is
    checked against a locked read of the ledger, and only when all of them
    fit are the sale rows written and the ledger decremented.
    """
    if not data.items:
        raise InvalidInputError("sale has no items")

    async with unit_of_work(db):
        if await get_warehouse_by_id(db, data.warehouse_id) is None:
            raise WarehouseNotFoundError(data.warehouse_id)

        deductions: Dict[int, Decimal] = {}
        for line in data.items:
            quantity = to_decimal(line.quantity)
            if quantity <= 0:
                raise InvalidQuantityError(quantity)
            variant = await get_variant_by_id(db, line.variant_id)
            if variant is None:
                raise ProductVariantNotFoundError(line.variant_id)
            base_variant_id, base_qty = await resolve_for_variant(db, variant, quantity)
            deductions[base_variant_id] = deductions.get(base_variant_id, Decimal("0")) + base_qty

        # lock in id order so two sales never wait on each other crosswise
        for base_variant_id, required in sorted(deductions.items()):
            on_hand = await get_level(db, data.warehouse_id, base_variant_id, for_update=True)
            if on_hand < required:
                logger.warning(
                    "sale_rejected",
                    extra={
                        "warehouse_id": data.warehouse_id,
                        "variant_id": base_variant_id,
                        "requested": required,
                        "available": on_hand,
                    },
                )
                raise InsufficientStockError(data.warehouse_id, base_variant_id, required, on_hand)

        sale = Sale(
            warehouse_id=data.warehouse_id,
            customer_name=data.customer_name,
            tax_amount=quantize_money(data.tax_amount),
            discount_amount=quantize_money(data.discount_amount),
            payment_method=data.payment_method,
            processed_by_user_id=processed_by_user_id,
            items=[
                SaleItem(
                    variant_id=line.variant_id,
                    quantity=to_decimal(line.quantity),
                    unit_price=quantize_money(line.unit_price),
                )
                for line in data.items
            ],
        )
        calculate_totals(sale)
        db.add(sale)
        await db.flush()

        for base_variant_id, required in sorted(deductions.items()):
            await adjust_level(db, data.warehouse_id, base_variant_id, -required)

    await db.refresh(sale)
    logger.info(
        "sale_processed",
        extra={
            "sale_id": sale.id,
            "warehouse_id": sale.warehouse_id,
            "total_amount": sale.total_amount,
            "lines": len(sale.items),
        },
    )
    return sale

async def get_sale(
    db: AsyncSession,
    sale_id: int,
) -> Sale:
    sale = await get_sale_by_id(db, sale_id)
    if sale is None:
        raise SaleNotFoundError(sale_id)
    return sale

async def list_sales_history(
    db: AsyncSession,
    warehouse_id: Optional[int] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    offset: int = 0,
    limit: int = 50,
) -> Tuple[List[Sale], int]:
    return await list_sales(db, warehouse_id, start_date, end_date, offset, limit)
