"""Catalog module repository implementations."""

from typing import List, Optional
from loguru import logger
from sqlalchemy import and_, true
from sqlmodel import select
from framework.repository.base import BaseRepository
from .models import Product


class ProductRepository(BaseRepository[Product]):
    """Product repository; update only applies whitelisted fields."""

    UPDATABLE_FIELDS = ("name", "price")

    def __init__(self, session):
        super().__init__(session, Product)

    async def update(self, entity: Product) -> Product:
        """
        Copy name and price onto the stored product, leaving every other field untouched.

        The caller may pass the session-tracked instance itself, already carrying
        edits to other fields; those edits are discarded by reloading the row.

        Raises:
            sqlalchemy.exc.NoResultFound: no product with entity.id exists
        """
        values = {field: getattr(entity, field) for field in self.UPDATABLE_FIELDS}
        statement = (
            select(Product)
            .where(Product.id == entity.id)
            .execution_options(populate_existing=True, autoflush=False)
        )
        result = await self.session.exec(statement)
        stored = result.first()
        if stored is None:
            # Let the base update surface the persistence error
            return await super().update(entity)
        for field, value in values.items():
            setattr(stored, field, value)
        logger.debug(f"Product {stored.id} whitelisted update: {', '.join(self.UPDATABLE_FIELDS)}")
        return await super().update(stored)

    async def get_by_sku(self, sku: str) -> Optional[Product]:
        """Find product by SKU."""
        return await self.find_one(sku=sku)

    async def search(
        self,
        name_contains: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None
    ) -> List[Product]:
        """Search by case-insensitive name fragment (wildcards matched literally) and inclusive price range."""
        conditions = []
        if name_contains:
            conditions.append(Product.name.icontains(name_contains, autoescape=True))
        if min_price is not None:
            conditions.append(Product.price >= min_price)
        if max_price is not None:
            conditions.append(Product.price <= max_price)
        predicate = and_(*conditions) if conditions else true()
        return await self.find(predicate)
