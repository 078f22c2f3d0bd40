"""Import every model module so ``Base.metadata`` knows all tables.

Foreign keys are declared by table name, so ``create_all`` needs the whole
set registered first. Entrypoints and the test suite call
``create_all_tables`` rather than touching ``Base.metadata`` directly.
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from stockcore.db.base import Base


def import_all_orm_models() -> None:
    # warehouses/suppliers/catalog first, everything else points at them
    import stockcore.db.models.warehouses  # noqa: F401
    import stockcore.db.models.suppliers  # noqa: F401
    import stockcore.db.models.catalog  # noqa: F401
    import stockcore.db.models.inventory  # noqa: F401
    import stockcore.db.models.sales  # noqa: F401
    import stockcore.db.models.procurements  # noqa: F401
    import stockcore.db.models.field_collections  # noqa: F401


async def create_all_tables(engine: AsyncEngine) -> None:
    import_all_orm_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_all_tables(engine: AsyncEngine) -> None:
    import_all_orm_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
