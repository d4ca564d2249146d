from typing import List, Optional
from loguru import logger
from sqlalchemy.exc import IntegrityError
from framework.exceptions.handler import BusinessException
from framework.repository.unit_of_work import UnitOfWork
from .models import Product, ProductCreate, ProductUpdate
from .repository import ProductRepository

class CatalogService:
    def __init__(self, uow: UnitOfWork):
        """Initialize Catalog Service with UnitOfWork."""
        self.uow = uow
        self.products = uow.get_repository(ProductRepository)

    async def create_product(self, data: ProductCreate) -> Product:
        """Create a product; a duplicate SKU is reported as a conflict."""
        if data.sku and await self.products.get_by_sku(data.sku):
            raise BusinessException(f"SKU {data.sku} already exists", code=409)

        product = await self.products.add(Product.model_validate(data))
        try:
            await self.uow.save_changes()
        except IntegrityError:
            # save_changes already rolled back
            logger.warning(f"Integrity error creating product sku={data.sku}")
            raise BusinessException("Product conflicts with an existing record", code=409)

        logger.info(f"Product {product.id} created: {product.name}")
        return product

    async def get_product(self, product_id: int) -> Product:
        product = await self.products.get(product_id)
        if product is None:
            raise BusinessException(f"Product {product_id} not found", code=404)
        return product

    async def list_products(self) -> List[Product]:
        return await self.products.all()

    async def search_products(
        self,
        name: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None
    ) -> List[Product]:
        if min_price is not None and max_price is not None and min_price > max_price:
            raise BusinessException("min_price must not exceed max_price", code=400)
        return await self.products.search(name, min_price, max_price)

    async def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        """Apply name and price; other payload fields are dropped by the repository."""
        await self.get_product(product_id)
        incoming = Product(id=product_id, **data.model_dump())
        product = await self.products.update(incoming)
        await self.uow.save_changes()
        logger.info(f"Product {product.id} updated: name={product.name} price={product.price}")
        return product
