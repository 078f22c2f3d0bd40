"""
Typed exceptions for the stock core.

Every exception carries a machine-readable ``code`` and the structured
values that caused it, so callers catch by type and map to responses
without parsing messages.

    StockCoreError
    +-- NotFoundError
    |   +-- WarehouseNotFoundError, SupplierNotFoundError,
    |   +-- CategoryNotFoundError, ProductFamilyNotFoundError,
    |   +-- ProductVariantNotFoundError, SaleNotFoundError,
    |   +-- ProcurementNotFoundError, ProcurementItemNotFoundError,
    |   +-- TransferNotFoundError
    +-- InvalidInputError
    |   +-- InvalidQuantityError
    |   +-- InvalidStatusError
    |   +-- InvalidStatusTransitionError
    +-- ConflictError
    |   +-- SKUExistsError, BarcodeExistsError, BaseUnitConflictError
    +-- InsufficientStockError
    +-- SameWarehouseError

Persistence failures (``sqlalchemy.exc.SQLAlchemyError``) are not wrapped.
"""

from decimal import Decimal


class StockCoreError(Exception):
    code: str = "STOCK_CORE_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------


class NotFoundError(StockCoreError):
    code = "NOT_FOUND"
    resource = "resource"

    def __init__(self, resource_id):
        self.resource_id = resource_id
        super().__init__(f"{self.resource} not found: {resource_id}")


class WarehouseNotFoundError(NotFoundError):
    code = "WAREHOUSE_NOT_FOUND"
    resource = "warehouse"


class SupplierNotFoundError(NotFoundError):
    code = "SUPPLIER_NOT_FOUND"
    resource = "supplier"


class CategoryNotFoundError(NotFoundError):
    code = "CATEGORY_NOT_FOUND"
    resource = "category"


class ProductFamilyNotFoundError(NotFoundError):
    code = "PRODUCT_FAMILY_NOT_FOUND"
    resource = "product family"


class ProductVariantNotFoundError(NotFoundError):
    code = "PRODUCT_VARIANT_NOT_FOUND"
    resource = "product variant"


class SaleNotFoundError(NotFoundError):
    code = "SALE_NOT_FOUND"
    resource = "sale"


class ProcurementNotFoundError(NotFoundError):
    code = "PROCUREMENT_NOT_FOUND"
    resource = "procurement"


class ProcurementItemNotFoundError(NotFoundError):
    code = "PROCUREMENT_ITEM_NOT_FOUND"
    resource = "procurement item"


class TransferNotFoundError(NotFoundError):
    code = "TRANSFER_NOT_FOUND"
    resource = "transfer"


# ---------------------------------------------------------------------------
# Invalid input
# ---------------------------------------------------------------------------


class InvalidInputError(StockCoreError):
    code = "INVALID_INPUT"


class InvalidQuantityError(InvalidInputError):
    code = "INVALID_QUANTITY"

    def __init__(self, quantity, reason: str = "quantity must be positive"):
        self.quantity = quantity
        super().__init__(f"invalid quantity {quantity}: {reason}")


class InvalidStatusError(InvalidInputError):
    code = "INVALID_STATUS"

    def __init__(self, status):
        self.status = status
        super().__init__(f"invalid status: {status!r}")


class InvalidStatusTransitionError(InvalidInputError):
    code = "INVALID_STATUS_TRANSITION"

    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        super().__init__(f"cannot change status from {current} to {requested}")


# ---------------------------------------------------------------------------
# Conflicts
# ---------------------------------------------------------------------------


class ConflictError(StockCoreError):
    code = "ALREADY_EXISTS"


class SKUExistsError(ConflictError):
    code = "SKU_EXISTS"

    def __init__(self, sku: str):
        self.sku = sku
        super().__init__(f"SKU already exists: {sku}")


class BarcodeExistsError(ConflictError):
    code = "BARCODE_EXISTS"

    def __init__(self, barcode: str):
        self.barcode = barcode
        super().__init__(f"barcode already exists: {barcode}")


class BaseUnitConflictError(ConflictError):
    code = "BASE_UNIT_EXISTS"

    def __init__(self, family_id: int, base_variant_id: int):
        self.family_id = family_id
        self.base_variant_id = base_variant_id
        super().__init__(
            f"product family {family_id} already has a base unit variant ({base_variant_id})"
        )


# ---------------------------------------------------------------------------
# Stock movement
# ---------------------------------------------------------------------------


class InsufficientStockError(StockCoreError):
    code = "INSUFFICIENT_STOCK"

    def __init__(
        self,
        warehouse_id: int,
        variant_id: int,
        requested: Decimal | None = None,
        available: Decimal | None = None,
    ):
        self.warehouse_id = warehouse_id
        self.variant_id = variant_id
        self.requested = requested
        self.available = available
        detail = ""
        if requested is not None and available is not None:
            detail = f" (requested {requested}, available {available})"
        super().__init__(
            f"insufficient stock for variant {variant_id} in warehouse {warehouse_id}{detail}"
        )


class SameWarehouseError(StockCoreError):
    code = "SAME_WAREHOUSE"

    def __init__(self, warehouse_id: int):
        self.warehouse_id = warehouse_id
        super().__init__("source and destination warehouse cannot be the same")
