# stockcore/domain/dashboard/service.py
from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from stockcore.core.config import settings
from stockcore.core.logging_config import get_logger
from stockcore.core.numeric import quantize_money
from stockcore.db.repositories.dashboard import (
    catalog_counts,
    inventory_figures,
    procurement_figures,
    sales_figures,
)
from .schemas import DashboardStats

logger = get_logger("services.dashboard")

MONEY_FIELDS = ("inventory_value", "total_procurement_spend", "total_sales_value", "accounts_receivable")


async def get_stats(db: AsyncSession, today: Optional[date] = None) -> DashboardStats:
    """Read-only summary across catalog, stock, procurement and sales."""
    figures = {}
    figures.update(await catalog_counts(db))
    figures.update(await inventory_figures(db, settings.LOW_STOCK_THRESHOLD))
    figures.update(await procurement_figures(db, today or date.today()))
    figures.update(await sales_figures(db))
    for field in MONEY_FIELDS:
        figures[field] = quantize_money(figures[field])

    logger.debug("dashboard_stats", extra={"total_skus": figures["total_skus"]})
    return DashboardStats(**figures)
