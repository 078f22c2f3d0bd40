"""Sale processing: base-unit deduction, all-or-nothing stock checks, totals."""

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from stockcore.core.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ProductVariantNotFoundError,
    SaleNotFoundError,
    WarehouseNotFoundError,
)
from stockcore.db.base import unit_of_work
from stockcore.db.models.sales import PaymentMethod, Sale, SaleItem
from stockcore.db.repositories.inventory import adjust_level, get_level
from stockcore.domain.catalog.schemas import VariantCreate
from stockcore.domain.catalog.service import create_variant
from stockcore.domain.sales.schemas import SaleCreate, SaleLine
from stockcore.domain.sales.service import (
    calculate_totals,
    get_sale,
    list_sales_history,
    process_sale,
)

USER_ID = 7


def _sale(warehouse_id, *lines, tax="0", discount="0"):
    return SaleCreate(
        warehouse_id=warehouse_id,
        payment_method=PaymentMethod.CASH,
        tax_amount=Decimal(tax),
        discount_amount=Decimal(discount),
        items=[
            SaleLine(variant_id=variant_id, quantity=Decimal(str(qty)), unit_price=Decimal(str(price)))
            for variant_id, qty, price in lines
        ],
    )


async def _sale_count(db):
    return await db.scalar(select(func.count(Sale.id)))


async def test_base_unit_sale_deducts_quantity(db, seed, stock):
    await stock(seed.main_warehouse_id, seed.milk_1l_id, 100)

    sale = await process_sale(db, _sale(seed.main_warehouse_id, (seed.milk_1l_id, 3, "1.20")), USER_ID)

    assert sale.id is not None
    assert sale.processed_by_user_id == USER_ID
    assert len(sale.items) == 1
    assert await get_level(db, seed.main_warehouse_id, seed.milk_1l_id) == Decimal("97")


async def test_pack_sale_deducts_from_base_unit(db, seed, stock):
    await stock(seed.main_warehouse_id, seed.milk_1l_id, 100)

    sale = await process_sale(db, _sale(seed.main_warehouse_id, (seed.milk_20l_id, 2, "22.00")), USER_ID)

    assert await get_level(db, seed.main_warehouse_id, seed.milk_1l_id) == Decimal("60")
    assert await get_level(db, seed.main_warehouse_id, seed.milk_20l_id) == Decimal("0")
    # the line keeps the quantity as sold
    assert sale.items[0].variant_id == seed.milk_20l_id
    assert sale.items[0].quantity == Decimal("2")


async def test_variant_without_base_sibling_deducts_itself(db, seed, stock):
    await stock(seed.main_warehouse_id, seed.rice_25kg_id, 100)

    await process_sale(db, _sale(seed.main_warehouse_id, (seed.rice_25kg_id, 2, "30.00")), USER_ID)

    assert await get_level(db, seed.main_warehouse_id, seed.rice_25kg_id) == Decimal("50")


async def test_oversell_rejects_whole_sale(db, seed, stock):
    await stock(seed.main_warehouse_id, seed.milk_1l_id, 30)

    with pytest.raises(InsufficientStockError) as exc_info:
        await process_sale(db, _sale(seed.main_warehouse_id, (seed.milk_20l_id, 2, "22.00")), USER_ID)

    assert exc_info.value.requested == Decimal("40")
    assert exc_info.value.available == Decimal("30")
    assert await get_level(db, seed.main_warehouse_id, seed.milk_1l_id) == Decimal("30")
    assert await _sale_count(db) == 0


async def test_lines_on_same_base_are_checked_together(db, seed, stock):
    await stock(seed.main_warehouse_id, seed.milk_1l_id, 30)

    # 20 + 15 = 35 > 30 although each line fits on its own
    with pytest.raises(InsufficientStockError):
        await process_sale(
            db,
            _sale(
                seed.main_warehouse_id,
                (seed.milk_20l_id, 1, "22.00"),
                (seed.milk_1l_id, 15, "1.20"),
            ),
            USER_ID,
        )

    assert await get_level(db, seed.main_warehouse_id, seed.milk_1l_id) == Decimal("30")
    assert await db.scalar(select(func.count(SaleItem.id))) == 0


async def test_one_short_line_fails_every_line(db, seed, stock):
    await stock(seed.main_warehouse_id, seed.milk_1l_id, 100)
    await stock(seed.main_warehouse_id, seed.rice_25kg_id, 1)

    with pytest.raises(InsufficientStockError):
        await process_sale(
            db,
            _sale(
                seed.main_warehouse_id,
                (seed.milk_1l_id, 5, "1.20"),
                (seed.rice_25kg_id, 1, "30.00"),
            ),
            USER_ID,
        )

    assert await get_level(db, seed.main_warehouse_id, seed.milk_1l_id) == Decimal("100")
    assert await get_level(db, seed.main_warehouse_id, seed.rice_25kg_id) == Decimal("1")


async def test_stock_in_other_warehouse_does_not_count(db, seed, stock):
    await stock(seed.store_warehouse_id, seed.milk_1l_id, 100)

    with pytest.raises(InsufficientStockError):
        await process_sale(db, _sale(seed.main_warehouse_id, (seed.milk_1l_id, 1, "1.20")), USER_ID)


async def test_unknown_warehouse(db, seed):
    with pytest.raises(WarehouseNotFoundError):
        await process_sale(db, _sale(999, (seed.milk_1l_id, 1, "1.20")), USER_ID)


async def test_unknown_variant(db, seed, stock):
    await stock(seed.main_warehouse_id, seed.milk_1l_id, 10)

    with pytest.raises(ProductVariantNotFoundError):
        await process_sale(
            db,
            _sale(seed.main_warehouse_id, (seed.milk_1l_id, 1, "1.20"), (999, 1, "1.00")),
            USER_ID,
        )

    assert await get_level(db, seed.main_warehouse_id, seed.milk_1l_id) == Decimal("10")


@pytest.mark.parametrize("quantity", ["0", "-2"])
async def test_non_positive_quantity(db, seed, stock, quantity):
    await stock(seed.main_warehouse_id, seed.milk_1l_id, 10)

    with pytest.raises(InvalidQuantityError):
        await process_sale(db, _sale(seed.main_warehouse_id, (seed.milk_1l_id, quantity, "1.20")), USER_ID)

    assert await _sale_count(db) == 0


async def test_totals_include_tax_and_discount(db, seed, stock):
    await stock(seed.main_warehouse_id, seed.milk_1l_id, 100)

    sale = await process_sale(
        db,
        _sale(
            seed.main_warehouse_id,
            (seed.milk_1l_id, 3, "1.25"),
            (seed.milk_20l_id, 1, "22.00"),
            tax="2.10",
            discount="1.00",
        ),
        USER_ID,
    )

    line_totals = sorted(item.line_total for item in sale.items)
    assert line_totals == [Decimal("3.75"), Decimal("22.00")]
    assert sale.total_amount == Decimal("26.85")


def test_calculate_totals_rounds_money():
    sale = Sale(
        tax_amount=Decimal("0"),
        discount_amount=Decimal("0"),
        items=[SaleItem(variant_id=1, quantity=Decimal("0.333"), unit_price=Decimal("1.00"))],
    )

    calculate_totals(sale)

    assert sale.items[0].line_total == Decimal("0.33")
    assert sale.total_amount == Decimal("0.33")


async def test_get_and_list_sales(db, seed, stock):
    await stock(seed.main_warehouse_id, seed.milk_1l_id, 100)
    first = await process_sale(db, _sale(seed.main_warehouse_id, (seed.milk_1l_id, 1, "1.20")), USER_ID)
    await process_sale(db, _sale(seed.main_warehouse_id, (seed.milk_1l_id, 2, "1.20")), USER_ID)

    fetched = await get_sale(db, first.id)
    assert fetched.id == first.id

    sales, total = await list_sales_history(db, warehouse_id=seed.main_warehouse_id)
    assert total == 2
    assert len(sales) == 2

    _, other_total = await list_sales_history(db, warehouse_id=seed.store_warehouse_id)
    assert other_total == 0

    with pytest.raises(SaleNotFoundError):
        await get_sale(db, 999)


async def test_fractional_variant_sells_from_own_row(db, seed, stock):
    half = await create_variant(
        db,
        VariantCreate(
            family_id=seed.milk_family_id, name="Milk 500ml", sku="MILK-500ML",
            unit="bottle", selling_price=Decimal("0.70"), conversion_factor=Decimal("0.5"),
        ),
    )
    half_id = half.id
    await stock(seed.main_warehouse_id, half_id, 10)
    await stock(seed.main_warehouse_id, seed.milk_1l_id, 100)

    await process_sale(db, _sale(seed.main_warehouse_id, (half_id, 4, "0.70")), USER_ID)

    assert await get_level(db, seed.main_warehouse_id, half_id) == Decimal("8")
    assert await get_level(db, seed.main_warehouse_id, seed.milk_1l_id) == Decimal("100")


async def test_second_session_cannot_oversell(session_factory, seed, stock):
    await stock(seed.main_warehouse_id, seed.milk_1l_id, 100)

    async with session_factory() as first, session_factory() as second:
        # both cashiers see the full shelf before either sells
        assert await get_level(second, seed.main_warehouse_id, seed.milk_1l_id) == Decimal("100")

        await process_sale(first, _sale(seed.main_warehouse_id, (seed.milk_1l_id, 60, "1.20")), USER_ID)
        with pytest.raises(InsufficientStockError) as exc_info:
            await process_sale(second, _sale(seed.main_warehouse_id, (seed.milk_1l_id, 60, "1.20")), USER_ID)

        assert exc_info.value.available == Decimal("40")
        assert await get_level(second, seed.main_warehouse_id, seed.milk_1l_id) == Decimal("40")
        assert await _sale_count(second) == 1


async def test_ledger_backstop_rejects_stale_decrement(session_factory, seed, stock):
    await stock(seed.main_warehouse_id, seed.milk_1l_id, 100)

    async with session_factory() as first, session_factory() as second:
        await process_sale(first, _sale(seed.main_warehouse_id, (seed.milk_1l_id, 60, "1.20")), USER_ID)

        # a writer that skipped the locked read still cannot go negative
        with pytest.raises(InsufficientStockError):
            async with unit_of_work(second):
                await adjust_level(second, seed.main_warehouse_id, seed.milk_1l_id, Decimal("-60"))

        assert await get_level(second, seed.main_warehouse_id, seed.milk_1l_id) == Decimal("40")
