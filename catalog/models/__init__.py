"""
카탈로그 데이터 모델
"""

from .base import CatalogModel, DiscountType
from .category import CategoryCreate, CategoryUpdate
from .inventory import InventoryAmount, PricingUpdate, StockUpdate
from .product import ProductCreate, ProductUpdate
from .user import LoginRequest, RegisterRequest, Role
from .variant import VariantAttributes, VariantCreate, VariantUpdate

__all__ = [
    "CatalogModel",
    "DiscountType",
    "CategoryCreate",
    "CategoryUpdate",
    "InventoryAmount",
    "PricingUpdate",
    "StockUpdate",
    "ProductCreate",
    "ProductUpdate",
    "LoginRequest",
    "RegisterRequest",
    "Role",
    "VariantAttributes",
    "VariantCreate",
    "VariantUpdate",
]
