from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Text

from stockcore.db.base import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)


class ProductFamily(Base):
    """Groups variants that are interchangeable by conversion.

    A "Milk" family may hold a 1L bottle (the base unit) and a 20L can
    whose conversion factor is 20; stock for the whole family is kept on
    the base unit's ledger row.
    """

    __tablename__ = "product_families"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)


class ProductVariant(Base):
    """A sellable, stockable SKU.

    ``conversion_factor`` says how many base units one unit of this variant
    holds. A factor of exactly 1 marks the family's base unit; 0 is read
    as 1.
    """

    __tablename__ = "product_variants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    family_id = Column(Integer, ForeignKey("product_families.id"), nullable=False, index=True)

    name = Column(String(100), nullable=False)
    sku = Column(String(100), nullable=False, unique=True)
    barcode = Column(String(100), nullable=True, unique=True)
    unit = Column(String(50), nullable=False, default="pcs")

    cost_price = Column(Numeric(12, 2), nullable=False, default=0)
    selling_price = Column(Numeric(12, 2), nullable=False, default=0)
    is_manufactured = Column(Boolean, nullable=False, default=False)
    conversion_factor = Column(Numeric(12, 3), nullable=False, default=1)

    __table_args__ = (
        CheckConstraint("conversion_factor >= 0", name="ck_product_variants_conversion_factor"),
    )
