from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.database.manager import DatabaseManager
from framework.repository.unit_of_work import UnitOfWork
from framework.response import ResponseModel
from ..models import ProductCreate, ProductUpdate
from ..service import CatalogService

router = APIRouter()

async def get_db():
    manager = DatabaseManager.get_instance()
    async for session in manager.sql.get_session():
        yield session

def get_uow(
    db: AsyncSession = Depends(get_db)
) -> UnitOfWork:
    """Dependency: one UnitOfWork (and its repositories) per request."""
    return UnitOfWork(session=db)

def get_catalog_service(uow: UnitOfWork = Depends(get_uow)) -> CatalogService:
    """Dependency: create CatalogService."""
    return CatalogService(uow)

@router.post("/")
async def create_product(
    data: ProductCreate,
    service: CatalogService = Depends(get_catalog_service)
):
    """Create product."""
    product = await service.create_product(data)
    return ResponseModel.success(data=product)

@router.get("/")
async def list_products(service: CatalogService = Depends(get_catalog_service)):
    """List every product."""
    products = await service.list_products()
    return ResponseModel.success(data={"items": products, "total": len(products)})

@router.get("/search")
async def search_products(
    name: Optional[str] = Query(None, max_length=255),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    service: CatalogService = Depends(get_catalog_service)
):
    """Search products by name fragment and price range."""
    products = await service.search_products(name, min_price, max_price)
    return ResponseModel.success(data={"items": products, "total": len(products)})

@router.get("/{product_id}")
async def get_product(
    product_id: int,
    service: CatalogService = Depends(get_catalog_service)
):
    """Get product by id."""
    product = await service.get_product(product_id)
    return ResponseModel.success(data=product)

@router.put("/{product_id}")
async def update_product(
    product_id: int,
    data: ProductUpdate,
    service: CatalogService = Depends(get_catalog_service)
):
    """Update product name and price."""
    product = await service.update_product(product_id, data)
    return ResponseModel.success(data=product)
