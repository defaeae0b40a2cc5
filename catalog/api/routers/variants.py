"""
상품 변형 API 엔드포인트
"""

from fastapi import APIRouter, Depends, status

from catalog.api.dependencies import get_catalog_manager, get_query, require_permission
from catalog.api.responses import success
from catalog.domain.catalog import CatalogManager
from catalog.domain.policy import Permission
from catalog.domain.query import CatalogQuery
from catalog.models import VariantCreate, VariantUpdate

router = APIRouter()


@router.get("")
async def list_variants(query: CatalogQuery = Depends(get_query)):
    """전체 변형 조회"""
    variants = await query.list_variants()
    return success(variants, results=len(variants))


@router.get("/{product_id}")
async def list_variants_for_product(product_id: str, query: CatalogQuery = Depends(get_query)):
    """상품별 변형 조회"""
    variants = await query.list_variants_for_product(product_id)
    return success(variants, results=len(variants))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_variant(
    variant: VariantCreate,
    manager: CatalogManager = Depends(get_catalog_manager),
    _=Depends(require_permission(Permission.CATALOG_WRITE)),
):
    """변형 생성 (관리자)"""
    created = await manager.create_variant(variant)
    return success(created, message="Variant created")


@router.patch("/{variant_id}")
async def update_variant(
    variant_id: str,
    variant: VariantUpdate,
    manager: CatalogManager = Depends(get_catalog_manager),
    _=Depends(require_permission(Permission.CATALOG_WRITE)),
):
    """변형 수정 (관리자)"""
    updated = await manager.update_variant(variant_id, variant)
    return success(updated, message="Variant updated")


@router.delete("/{variant_id}")
async def delete_variant(
    variant_id: str,
    manager: CatalogManager = Depends(get_catalog_manager),
    _=Depends(require_permission(Permission.CATALOG_WRITE)),
):
    """변형 삭제 (관리자)"""
    await manager.delete_variant(variant_id)
    return success(message="Variant deleted successfully")
