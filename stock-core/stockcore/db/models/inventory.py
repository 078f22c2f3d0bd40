import enum
from sqlalchemy import CheckConstraint, Column, Date, DateTime, Enum, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stockcore.db.base import Base

NON_NEGATIVE_QUANTITY = "ck_inventory_levels_quantity_non_negative"


class InventoryLevel(Base):
    """On-hand quantity of one variant in one warehouse.

    One row per (warehouse, variant); a missing row means zero. Rows are
    only ever changed by adding a delta, never overwritten, and the check
    constraint keeps the quantity from going below zero.
    """

    __tablename__ = "inventory_levels"

    id = Column(Integer, primary_key=True, autoincrement=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id", ondelete="CASCADE"), nullable=False, index=True)
    variant_id = Column(Integer, ForeignKey("product_variants.id", ondelete="CASCADE"), nullable=False, index=True)

    quantity = Column(Numeric(12, 3), nullable=False, default=0)
    batch_number = Column(String(100), nullable=True)
    expiry_date = Column(Date, nullable=True)

    __table_args__ = (
        UniqueConstraint("warehouse_id", "variant_id", name="uq_inventory_levels_warehouse_variant"),
        CheckConstraint("quantity >= 0", name=NON_NEGATIVE_QUANTITY),
    )


class TransferStatus(str, enum.Enum):
    PENDING = "pending"
    IN_TRANSIT = "in_transit"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class InventoryTransfer(Base):
    __tablename__ = "inventory_transfers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source_warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)
    destination_warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)
    authorized_by_user_id = Column(Integer, nullable=False)

    transferred_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    status = Column(
        Enum(TransferStatus, name="transfer_status_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=TransferStatus.PENDING,
        index=True,
    )

    items = relationship(
        "InventoryTransferItem",
        back_populates="transfer",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="InventoryTransferItem.id",
    )

    __table_args__ = (
        CheckConstraint("source_warehouse_id <> destination_warehouse_id", name="ck_inventory_transfers_distinct"),
    )


class InventoryTransferItem(Base):
    __tablename__ = "inventory_transfer_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    transfer_id = Column(Integer, ForeignKey("inventory_transfers.id", ondelete="CASCADE"), nullable=False, index=True)
    variant_id = Column(Integer, ForeignKey("product_variants.id"), nullable=False)
    quantity = Column(Numeric(12, 3), nullable=False)

    transfer = relationship("InventoryTransfer", back_populates="items")
