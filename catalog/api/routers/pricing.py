"""
가격 API 엔드포인트
"""

from fastapi import APIRouter, Depends

from catalog.api.dependencies import get_pricing_engine, get_query, require_permission
from catalog.api.responses import success
from catalog.domain.policy import Permission
from catalog.domain.pricing import PricingEngine
from catalog.domain.query import CatalogQuery
from catalog.models import PricingUpdate

router = APIRouter()


@router.patch("/product/{product_id}")
async def update_product_pricing(
    product_id: str,
    body: PricingUpdate,
    engine: PricingEngine = Depends(get_pricing_engine),
    _=Depends(require_permission(Permission.PRICING_WRITE)),
):
    """상품 가격/할인 변경 (관리자)"""
    product = await engine.update_product_pricing(
        product_id, price=body.price, discount=body.discount, discount_type=body.discount_type
    )
    return success(product)


@router.get("/product/{product_id}")
async def get_product_pricing(product_id: str, query: CatalogQuery = Depends(get_query)):
    """할인 적용가 포함 상품 조회"""
    return success(await query.get_product(product_id))
