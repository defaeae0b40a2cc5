"""
재고 관련 요청 모델
"""

from typing import Annotated, Optional, Union

from pydantic import Field

from .base import CatalogModel, DiscountType

# 정수는 정수 그대로, 문자열/bool은 거부
StockValue = Union[
    Annotated[int, Field(ge=0, strict=True)],
    Annotated[float, Field(ge=0, strict=True, allow_inf_nan=False)],
]


class StockUpdate(CatalogModel):
    """재고 수량 직접 설정 (0 이상의 숫자)"""

    stock: StockValue


class InventoryAmount(CatalogModel):
    """재고 증감 수량"""

    amount: int = Field(..., gt=0, strict=True)


class PricingUpdate(CatalogModel):
    """가격/할인 변경 요청 (전달된 필드만 반영)"""

    price: Optional[float] = Field(None, ge=0)
    discount: Optional[float] = Field(None, ge=0)
    discount_type: Optional[DiscountType] = None
