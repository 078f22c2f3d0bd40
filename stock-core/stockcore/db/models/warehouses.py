import enum
from sqlalchemy import Column, Enum, Integer, String, Text

from stockcore.db.base import Base


class WarehouseType(str, enum.Enum):
    STORE = "store"
    FACTORY = "factory"
    DISTRIBUTION_CENTER = "distribution_center"


class Warehouse(Base):
    """A storage location that holds inventory levels.

    Stores, factories and distribution centers are all warehouses; every
    ledger row, sale, procurement and collection points at one.
    """

    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    type = Column(
        Enum(WarehouseType, name="warehouse_type_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=WarehouseType.STORE,
        index=True,
    )
    address = Column(Text, nullable=True)
