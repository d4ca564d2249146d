from datetime import datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field

class ProductBase(SQLModel):
    name: str = Field(max_length=255, index=True)
    price: float = Field(ge=0)

class Product(ProductBase, table=True):
    """Catalog product; only name and price are caller-controlled after creation."""
    __tablename__ = "products"

    id: Optional[int] = Field(default=None, primary_key=True)
    sku: Optional[str] = Field(default=None, max_length=64, unique=True, index=True)
    description: Optional[str] = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class ProductCreate(ProductBase):
    sku: Optional[str] = Field(default=None, max_length=64)
    description: Optional[str] = Field(default=None, max_length=2000)

class ProductUpdate(ProductBase):
    """Update payload; fields beyond name and price are ignored by the repository."""
    sku: Optional[str] = None
    description: Optional[str] = None
