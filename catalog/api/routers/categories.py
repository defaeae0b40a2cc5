"""
카테고리 API 엔드포인트
"""

from fastapi import APIRouter, Depends, status

from catalog.api.dependencies import get_catalog_manager, get_query, require_permission
from catalog.api.responses import success
from catalog.domain.catalog import CatalogManager
from catalog.domain.policy import Permission
from catalog.domain.query import CatalogQuery
from catalog.models import CategoryCreate, CategoryUpdate

router = APIRouter()


@router.get("")
async def list_categories(query: CatalogQuery = Depends(get_query)):
    categories = await query.list_categories()
    return success(categories, results=len(categories))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    category: CategoryCreate,
    manager: CatalogManager = Depends(get_catalog_manager),
    _=Depends(require_permission(Permission.CATALOG_WRITE)),
):
    """카테고리 생성 (관리자)"""
    created = await manager.create_category(category)
    return success(created, message="Category created")


@router.get("/{category_id}")
async def get_category(category_id: str, query: CatalogQuery = Depends(get_query)):
    return success(await query.get_category(category_id))


@router.api_route("/{category_id}", methods=["PUT", "PATCH"])
async def update_category(
    category_id: str,
    category: CategoryUpdate,
    manager: CatalogManager = Depends(get_catalog_manager),
    _=Depends(require_permission(Permission.CATALOG_WRITE)),
):
    """카테고리 수정 (관리자)"""
    updated = await manager.update_category(category_id, category)
    return success(updated, message="Category updated")


@router.delete("/{category_id}")
async def delete_category(
    category_id: str,
    manager: CatalogManager = Depends(get_catalog_manager),
    _=Depends(require_permission(Permission.CATALOG_WRITE)),
):
    """카테고리 삭제 (관리자, 소속 상품은 삭제되지 않음)"""
    await manager.delete_category(category_id)
    return success(message="Category deleted")
