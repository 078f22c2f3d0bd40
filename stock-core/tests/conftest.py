"""
Pytest fixtures for the stock core test suite.

Provides:
- an in-memory SQLite database (aiosqlite, one shared connection) with
  every table created
- a session per test and a session factory for route tests
- seeded warehouses, suppliers, product families and variants
- an httpx client bound to the FastAPI app with ``get_db`` overridden
"""

import os

# must be set before stockcore.db.base builds its engine
os.environ.setdefault("DB_URL", "sqlite+aiosqlite://")

import logging
from dataclasses import dataclass
from decimal import Decimal

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stockcore.core.logging_config import configure_logging, reset_logging
from stockcore.db.orm_registry import create_all_tables, drop_all_tables
from stockcore.db.repositories.inventory import adjust_level
from stockcore.domain.catalog.schemas import (
    CategoryCreate,
    FamilyCreate,
    SupplierCreate,
    VariantCreate,
    WarehouseCreate,
)
from stockcore.domain.catalog.service import (
    create_category,
    create_family,
    create_supplier,
    create_variant,
    create_warehouse,
)

TEST_USER_ID = 7


@dataclass
class Seed:
    main_warehouse_id: int
    store_warehouse_id: int
    supplier_id: int
    milk_family_id: int
    milk_1l_id: int
    milk_20l_id: int
    rice_family_id: int
    rice_25kg_id: int


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_all_tables(engine)
    yield engine
    await drop_all_tables(engine)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seed(session_factory) -> Seed:
    """Two warehouses, one supplier and two product families.

    Milk has a 1L base unit and a 20L can (factor 20). Rice only has a
    25kg sack (factor 25) and no base unit.
    """
    async with session_factory() as session:
        main = await create_warehouse(session, WarehouseCreate(name="Main Warehouse", type="distribution_center"))
        store = await create_warehouse(session, WarehouseCreate(name="Downtown Store", type="store"))
        supplier = await create_supplier(session, SupplierCreate(name="Green Valley Dairy", phone="555-0100"))
        category = await create_category(session, CategoryCreate(name="Groceries"))

        milk = await create_family(session, FamilyCreate(category_id=category.id, name="Milk"))
        milk_1l = await create_variant(session, VariantCreate(
            family_id=milk.id, name="Milk 1L", sku="MILK-1L", unit="bottle",
            cost_price=Decimal("0.80"), selling_price=Decimal("1.20"),
            conversion_factor=Decimal("1"),
        ))
        milk_20l = await create_variant(session, VariantCreate(
            family_id=milk.id, name="Milk 20L", sku="MILK-20L", unit="can",
            cost_price=Decimal("15.00"), selling_price=Decimal("22.00"),
            conversion_factor=Decimal("20"),
        ))

        rice = await create_family(session, FamilyCreate(category_id=category.id, name="Rice"))
        rice_25kg = await create_variant(session, VariantCreate(
            family_id=rice.id, name="Rice 25kg", sku="RICE-25KG", unit="sack",
            selling_price=Decimal("30.00"), conversion_factor=Decimal("25"),
        ))

        assert main.id == 1

        return Seed(
            main_warehouse_id=main.id,
            store_warehouse_id=store.id,
            supplier_id=supplier.id,
            milk_family_id=milk.id,
            milk_1l_id=milk_1l.id,
            milk_20l_id=milk_20l.id,
            rice_family_id=rice.id,
            rice_25kg_id=rice_25kg.id,
        )


@pytest.fixture
def stock(db):
    """Put stock on a ledger row directly and commit it."""

    async def _stock(warehouse_id: int, variant_id: int, quantity) -> None:
        await adjust_level(db, warehouse_id, variant_id, Decimal(str(quantity)))
        await db.commit()

    return _stock


# =============================================================================
# HTTP fixtures
# =============================================================================


@pytest.fixture
async def client(session_factory):
    from stockcore.db.base import get_db
    from stockcore.main import app

    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()
