"""
상품 데이터 모델
"""

from typing import Optional

from pydantic import Field

from .base import CatalogModel, DiscountType


class ProductCreate(CatalogModel):
    """상품 생성 요청"""

    name: str = Field(..., min_length=1, description="상품명")
    description: Optional[str] = Field(None, description="상품 설명")
    category: str = Field(..., min_length=1, description="카테고리 이름 또는 ID")
    price: float = Field(..., ge=0, description="기본 가격")
    discount: float = Field(default=0, ge=0, description="할인값")
    discount_type: DiscountType = Field(default=DiscountType.PERCENTAGE)
    inventory: int = Field(default=0, ge=0, description="재고 수량")


class ProductUpdate(CatalogModel):
    """상품 수정 요청 (전달된 필드만 반영)"""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    discount: Optional[float] = Field(None, ge=0)
    discount_type: Optional[DiscountType] = None
    inventory: Optional[int] = Field(None, ge=0)
