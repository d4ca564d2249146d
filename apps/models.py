"""
Model registration: import every table model here so SQLModel.metadata knows about it
(used by SQLDriver.create_all and the test fixtures).
"""
from apps.catalog.models import Product

__all__ = ["Product"]
