import enum
from decimal import Decimal
from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stockcore.db.base import Base


class ProcurementStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    ORDERED = "ordered"
    PARTIAL = "partial"
    RECEIVED = "received"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (ProcurementStatus.RECEIVED, ProcurementStatus.CANCELLED)


class Procurement(Base):
    """A purchase order placed with a supplier for delivery to a warehouse.

    Stock is credited only when the order enters ``received``.
    """

    __tablename__ = "procurements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)
    ordered_by_user_id = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    expected_delivery = Column(Date, nullable=True)
    status = Column(
        Enum(ProcurementStatus, name="procurement_status_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ProcurementStatus.PENDING,
        index=True,
    )

    items = relationship(
        "ProcurementItem",
        back_populates="procurement",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ProcurementItem.id",
    )

    @property
    def total_cost(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))


class ProcurementItem(Base):
    __tablename__ = "procurement_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    procurement_id = Column(Integer, ForeignKey("procurements.id", ondelete="CASCADE"), nullable=False, index=True)
    variant_id = Column(Integer, ForeignKey("product_variants.id"), nullable=False)

    quantity_ordered = Column(Numeric(12, 3), nullable=False)
    quantity_received = Column(Numeric(12, 3), nullable=False, default=0)
    unit_cost = Column(Numeric(12, 2), nullable=False)

    procurement = relationship("Procurement", back_populates="items")

    @property
    def line_total(self) -> Decimal:
        return self.quantity_ordered * self.unit_cost

    @property
    def quantity_to_credit(self) -> Decimal:
        # an order marked received without recorded receipts credits what was ordered
        if self.quantity_received:
            return self.quantity_received
        return self.quantity_ordered
