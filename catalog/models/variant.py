"""
상품 변형(옵션 조합) 데이터 모델
"""

from typing import Optional

from pydantic import Field

from .base import CatalogModel, DiscountType


class VariantAttributes(CatalogModel):
    """변형 속성"""

    size: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None


class VariantCreate(CatalogModel):
    """변형 생성 요청"""

    product: str = Field(..., min_length=1, description="소유 상품 ID")
    variant_name: str = Field(..., min_length=1, description="변형명")
    attributes: VariantAttributes = Field(default_factory=VariantAttributes)
    price: float = Field(..., ge=0)
    discount: float = Field(default=0, ge=0)
    discount_type: DiscountType = Field(default=DiscountType.PERCENTAGE)
    inventory: int = Field(default=0, ge=0)


class VariantUpdate(CatalogModel):
    """변형 수정 요청"""

    product: Optional[str] = Field(None, min_length=1)
    variant_name: Optional[str] = Field(None, min_length=1)
    attributes: Optional[VariantAttributes] = None
    price: Optional[float] = Field(None, ge=0)
    discount: Optional[float] = Field(None, ge=0)
    discount_type: Optional[DiscountType] = None
    inventory: Optional[int] = Field(None, ge=0)
