"""
가격 계산 엔진
기본 가격과 할인 정보로 최종 판매가를 계산한다.
최종가는 조회 시점에 계산되는 파생값이며 저장하지 않는다.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

from catalog.domain.validator import is_number
from catalog.exceptions import NotFoundError, ValidationError
from catalog.models.base import DiscountType
from catalog.monitoring import get_logger
from catalog.storage.base import BaseStorage

logger = get_logger(__name__)

TWO_PLACES = Decimal("0.01")


def calculate_final_price(
    price: Any,
    discount: Any = 0,
    discount_type: Any = DiscountType.PERCENTAGE,
) -> float:
    """
    할인 적용 최종가 계산

    - percentage: price - price * discount / 100 (하한 없음, 100% 초과 할인은 음수)
    - fixed: max(price - discount, 0)

    결과는 소수점 둘째 자리에서 반올림한다 (.005는 0에서 먼 쪽으로).

    Args:
        price: 기본 가격 (0 이상)
        discount: 할인값 (0 이상, None은 0)
        discount_type: 할인 방식 (None은 percentage)

    Returns:
        최종 가격

    Raises:
        ValidationError: 음수/숫자가 아닌 값 또는 알 수 없는 할인 방식
    """
    if discount is None:
        discount = 0
    if discount_type is None:
        discount_type = DiscountType.PERCENTAGE

    if not is_number(price) or price < 0:
        raise ValidationError("Invalid price value. Must be a non-negative number.")
    if not is_number(discount) or discount < 0:
        raise ValidationError("Invalid discount value. Must be a non-negative number.")
    try:
        mode = DiscountType(discount_type)
    except ValueError:
        raise ValidationError(f"Invalid discount type: {discount_type}") from None

    # float 이진 오차를 피하기 위해 문자열 표현으로 Decimal 변환
    base = Decimal(str(price))
    amount = Decimal(str(discount))

    if mode is DiscountType.PERCENTAGE:
        final = base - base * amount / Decimal(100)
    else:
        final = max(base - amount, Decimal(0))

    return float(final.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


class PricingEngine:
    """
    상품/변형 문서에 최종가를 붙이고 가격 정보를 변경하는 엔진
    """

    def __init__(self, storage: BaseStorage):
        self.storage = storage

    @staticmethod
    def annotate(record: Dict[str, Any]) -> Dict[str, Any]:
        """finalPrice가 추가된 문서 사본 반환"""
        return {
            **record,
            "finalPrice": calculate_final_price(
                record.get("price"),
                record.get("discount"),
                record.get("discountType"),
            ),
        }

    async def update_product_pricing(
        self,
        product_id: str,
        price: Optional[float] = None,
        discount: Optional[float] = None,
        discount_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        상품 가격/할인 변경

        전달된 값만 반영하며, 저장 전에 변경 후 값으로 최종가를 계산해 검증한다.

        Returns:
            finalPrice가 포함된 수정된 상품

        Raises:
            NotFoundError: 상품 없음
            ValidationError: 가격/할인값 오류
        """
        product = await self.storage.get("products", product_id)
        if not product:
            raise NotFoundError("Product not found")

        changes = {
            key: value
            for key, value in (
                ("price", price),
                ("discount", discount),
                ("discountType", discount_type),
            )
            if value is not None
        }
        # 저장 전에 검증
        self.annotate({**product, **changes})

        updated = await self.storage.update("products", product_id, changes)
        if updated is None:
            raise NotFoundError("Product not found")

        logger.info(f"상품 가격 변경: {product_id} {changes}")
        return self.annotate(updated)
