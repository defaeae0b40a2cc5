"""
도메인 로직 모듈
비즈니스 규칙과 핵심 로직을 담당
"""

from catalog.domain.accounts import AccountService
from catalog.domain.catalog import CatalogManager
from catalog.domain.inventory import EntityKind, InventoryAdjuster
from catalog.domain.policy import Permission, Principal, authorize
from catalog.domain.pricing import PricingEngine, calculate_final_price
from catalog.domain.query import CatalogQuery, ProductFilters, SortKey

__all__ = [
    "AccountService",
    "CatalogManager",
    "EntityKind",
    "InventoryAdjuster",
    "Permission",
    "Principal",
    "authorize",
    "PricingEngine",
    "calculate_final_price",
    "CatalogQuery",
    "ProductFilters",
    "SortKey",
]
