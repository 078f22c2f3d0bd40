# stockcore/domain/catalog/units.py
"""
Base-unit resolution for product families.

All stock of a family is tracked on the ledger row of its base unit, the
variant whose conversion factor is exactly 1. Selling two 20L cans of milk
therefore deducts 40 from the 1L bottle's row.
"""

from decimal import Decimal
from typing import Iterable, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from stockcore.core.logging_config import get_logger
from stockcore.core.numeric import to_decimal
from stockcore.db.models.catalog import ProductVariant
from stockcore.db.repositories.catalog import list_variants_by_family

logger = get_logger("units")

ONE = Decimal("1")


def effective_factor(variant: ProductVariant) -> Decimal:
    factor = to_decimal(variant.conversion_factor if variant.conversion_factor is not None else ONE)
    # a zero factor is an unset factor
    if factor == 0:
        return ONE
    return factor


def is_base_unit(variant: ProductVariant) -> bool:
    return effective_factor(variant) == ONE


def find_base_variant(siblings: Iterable[ProductVariant]) -> Optional[ProductVariant]:
    """First base-unit variant by ascending id, or None."""
    for sibling in sorted(siblings, key=lambda v: v.id):
        if is_base_unit(sibling):
            return sibling
    return None


def resolve_base_quantity(
    variant: ProductVariant,
    siblings: Iterable[ProductVariant],
    requested_qty: Decimal,
) -> Tuple[int, Decimal]:
    """Translate a quantity of ``variant`` into (ledger variant id, base quantity).

    A base-unit variant resolves to itself with the quantity untouched.
    A pack (factor above 1) is multiplied by its factor and charged to the
    family's base unit; without one, the pack's own row is used. A fraction
    (factor below 1) is multiplied but stays on its own row.
    """
    requested_qty = to_decimal(requested_qty)
    factor = effective_factor(variant)
    if factor == ONE:
        return variant.id, requested_qty

    base_qty = requested_qty * factor
    if factor < ONE:
        return variant.id, base_qty

    base = find_base_variant(s for s in siblings if s.family_id == variant.family_id)
    if base is None:
        logger.warning(
            "base_unit_missing",
            extra={"variant_id": variant.id, "family_id": variant.family_id},
        )
        return variant.id, base_qty
    return base.id, base_qty


async def resolve_for_variant(
    db: AsyncSession,
    variant: ProductVariant,
    requested_qty: Decimal,
) -> Tuple[int, Decimal]:
    if effective_factor(variant) <= ONE:
        # only packs look at their siblings
        return resolve_base_quantity(variant, (), requested_qty)
    siblings = await list_variants_by_family(db, variant.family_id)
    return resolve_base_quantity(variant, siblings, requested_qty)
