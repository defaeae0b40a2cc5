"""
상품 API 엔드포인트
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from catalog.api.dependencies import get_adjuster, get_catalog_manager, get_query, require_permission
from catalog.api.responses import success
from catalog.domain.catalog import CatalogManager
from catalog.domain.inventory import EntityKind, InventoryAdjuster
from catalog.domain.policy import Permission
from catalog.domain.query import CatalogQuery, ProductFilters
from catalog.models import InventoryAmount, ProductCreate, ProductUpdate

router = APIRouter()


@router.get("")
async def list_products(
    search: Optional[str] = Query(None, description="상품명 검색어 (대소문자 무시)"),
    category: Optional[str] = Query(None, description="카테고리명"),
    min_price: Optional[float] = Query(None, alias="minPrice", description="변형 최소 가격"),
    max_price: Optional[float] = Query(None, alias="maxPrice", description="변형 최대 가격"),
    sort: Optional[str] = Query(None, description="price_asc, price_desc, date_newest, date_oldest"),
    in_stock: bool = Query(False, alias="inStock", description="재고 있는 변형만"),
    size: Optional[str] = Query(None, description="변형 사이즈"),
    color: Optional[str] = Query(None, description="변형 색상"),
    query: CatalogQuery = Depends(get_query),
):
    """상품 목록 조회"""
    filters = ProductFilters(
        search=search,
        category=category,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
        in_stock=in_stock,
        size=size,
        color=color,
    )
    products = await query.list_products(filters)
    return success(products, results=len(products))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    manager: CatalogManager = Depends(get_catalog_manager),
    _=Depends(require_permission(Permission.CATALOG_WRITE)),
):
    """상품 생성 (관리자)"""
    created = await manager.create_product(product)
    return success(created, message="Product created successfully")


@router.get("/low-stock")
async def get_low_stock_products(
    threshold: Optional[str] = Query(None, description="기준 재고 (기본 5)"),
    query: CatalogQuery = Depends(get_query),
    _=Depends(require_permission(Permission.INVENTORY_READ)),
):
    """저재고 상품 조회 (관리자)"""
    products = await query.get_low_stock(threshold, EntityKind.PRODUCT)
    return success(products, count=len(products))


@router.get("/{product_id}")
async def get_product(product_id: str, query: CatalogQuery = Depends(get_query)):
    """상품 상세 조회"""
    return success(await query.get_product(product_id))


@router.patch("/{product_id}")
async def update_product(
    product_id: str,
    product: ProductUpdate,
    manager: CatalogManager = Depends(get_catalog_manager),
    _=Depends(require_permission(Permission.CATALOG_WRITE)),
):
    """상품 수정 (관리자)"""
    updated = await manager.update_product(product_id, product)
    return success(updated, message="Product updated")


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    manager: CatalogManager = Depends(get_catalog_manager),
    _=Depends(require_permission(Permission.CATALOG_WRITE)),
):
    """상품 삭제 (관리자)"""
    await manager.delete_product(product_id)
    return success(message="Product deleted")


@router.patch("/{product_id}/increase-inventory")
async def increase_inventory(
    product_id: str,
    body: InventoryAmount,
    adjuster: InventoryAdjuster = Depends(get_adjuster),
    _=Depends(require_permission(Permission.INVENTORY_WRITE)),
):
    """재고 증가 (관리자)"""
    product = await adjuster.increase(product_id, body.amount)
    return success(product, message="Inventory increased")


@router.patch("/{product_id}/decrease-inventory")
async def decrease_inventory(
    product_id: str,
    body: InventoryAmount,
    adjuster: InventoryAdjuster = Depends(get_adjuster),
    _=Depends(require_permission(Permission.INVENTORY_WRITE)),
):
    """재고 차감 (관리자)"""
    product = await adjuster.decrease(product_id, body.amount)
    return success(product, message="Inventory decreased")
