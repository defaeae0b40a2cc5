"""
재고 API 엔드포인트 (관리자 전용)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from catalog.api.dependencies import get_adjuster, get_query, require_permission
from catalog.api.responses import success
from catalog.domain.inventory import EntityKind, InventoryAdjuster
from catalog.domain.policy import Permission
from catalog.domain.query import CatalogQuery
from catalog.models import StockUpdate

router = APIRouter()

require_read = require_permission(Permission.INVENTORY_READ)
require_write = require_permission(Permission.INVENTORY_WRITE)


@router.patch("/products/{product_id}/stock")
async def update_product_stock(
    product_id: str,
    body: StockUpdate,
    adjuster: InventoryAdjuster = Depends(get_adjuster),
    _=Depends(require_write),
):
    """상품 재고 설정"""
    return success(await adjuster.set_stock(EntityKind.PRODUCT, product_id, body.stock))


@router.patch("/variants/{variant_id}/stock")
async def update_variant_stock(
    variant_id: str,
    body: StockUpdate,
    adjuster: InventoryAdjuster = Depends(get_adjuster),
    _=Depends(require_write),
):
    """변형 재고 설정"""
    return success(await adjuster.set_stock(EntityKind.VARIANT, variant_id, body.stock))


@router.get("/products/low-stock")
async def get_low_stock_products(
    threshold: Optional[str] = Query(None),
    query: CatalogQuery = Depends(get_query),
    _=Depends(require_read),
):
    products = await query.get_low_stock(threshold, EntityKind.PRODUCT)
    return success(products, count=len(products))


@router.get("/variants/low-stock")
async def get_low_stock_variants(
    threshold: Optional[str] = Query(None),
    query: CatalogQuery = Depends(get_query),
    _=Depends(require_read),
):
    variants = await query.get_low_stock(threshold, EntityKind.VARIANT)
    return success(variants, count=len(variants))


@router.put("/products/{product_id}/records/{variant_key}")
async def set_inventory_record(
    product_id: str,
    variant_key: str,
    body: StockUpdate,
    adjuster: InventoryAdjuster = Depends(get_adjuster),
    _=Depends(require_write),
):
    """(상품, variantKey) 재고 레코드 설정"""
    return success(await adjuster.set_record_stock(product_id, variant_key, body.stock))


@router.get("/products/{product_id}/records")
async def list_inventory_records(
    product_id: str,
    adjuster: InventoryAdjuster = Depends(get_adjuster),
    _=Depends(require_read),
):
    records = await adjuster.list_records(product_id)
    return success(records, results=len(records))
