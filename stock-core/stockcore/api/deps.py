# stockcore/api/deps.py
import asyncio
from dataclasses import dataclass
from fastapi import Header, Query

from stockcore.core.config import settings


@dataclass
class Pagination:
    page: int
    per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


def get_pagination(
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
) -> Pagination:
    return Pagination(page=page, per_page=per_page)


def get_current_user_id(x_user_id: int = Header(..., alias="X-User-ID")) -> int:
    # the identity layer in front of this service sets the header
    return x_user_id


async def run_bounded(operation):
    """Await a service call under the configured deadline.

    On timeout the call is cancelled; its unit of work rolls back.
    """
    return await asyncio.wait_for(operation, timeout=settings.OPERATION_TIMEOUT_SECONDS)
