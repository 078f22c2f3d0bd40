from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, Text
from sqlalchemy.sql import func

from stockcore.db.base import Base


class Collection(Base):
    """Goods received in the field by an agent from a supplier.

    The recorded weight is credited to the warehouse's stock as-is.
    """

    __tablename__ = "collections"

    id = Column(Integer, primary_key=True, autoincrement=True)
    variant_id = Column(Integer, ForeignKey("product_variants.id"), nullable=False, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)
    agent_id = Column(Integer, nullable=False, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)

    weight = Column(Numeric(12, 3), nullable=False)
    collected_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
    notes = Column(Text, nullable=True)
