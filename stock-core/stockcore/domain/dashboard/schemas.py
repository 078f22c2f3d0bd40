# stockcore/domain/dashboard/schemas.py
from decimal import Decimal
from pydantic import BaseModel

class DashboardStats(BaseModel):
    total_products: int
    total_families: int
    total_categories: int
    total_warehouses: int
    total_suppliers: int

    total_skus: int
    low_stock_items: int
    out_of_stock_items: int
    inventory_value: Decimal

    active_procurements: int
    pending_deliveries: int
    overdue_procurements: int
    total_procurement_spend: Decimal
    total_collected_weight: Decimal

    total_sales_value: Decimal
    # sales taken on credit
    accounts_receivable: Decimal
