"""
재고 조정 모듈
상품/변형 재고의 설정, 증가, 차감을 검증하고 반영한다
"""

from enum import Enum
from typing import Any, Dict, List

from catalog.domain.validator import require_amount, require_stock
from catalog.exceptions import (
    DuplicateKeyError,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
    VersionConflictError,
)
from catalog.monitoring import get_logger, global_metrics
from catalog.storage.base import BaseStorage

logger = get_logger(__name__)


class EntityKind(str, Enum):
    """재고를 가진 엔티티 종류"""

    PRODUCT = "product"
    VARIANT = "variant"


ENTITY_TABLES = {
    EntityKind.PRODUCT: ("products", "Product not found"),
    EntityKind.VARIANT: ("variants", "Variant not found"),
}


def resolve_kind(kind: Any) -> EntityKind:
    try:
        return EntityKind(kind)
    except ValueError:
        raise ValidationError(f"Invalid entity kind: {kind}") from None


class InventoryAdjuster:
    """
    재고 조정기

    set은 마지막 쓰기가 이긴다. increase/decrease는 문서 version을 이용한
    낙관적 갱신으로 수행하며, 충돌 시 다시 읽어 max_retries회까지 재시도한다.
    """

    def __init__(self, storage: BaseStorage, max_retries: int = 3):
        self.storage = storage
        self.max_retries = max_retries

    async def set_stock(self, kind: Any, entity_id: str, stock: Any) -> Dict[str, Any]:
        """
        재고 수량 직접 설정

        Args:
            kind: product 또는 variant
            entity_id: 엔티티 ID
            stock: 새 재고 수량 (0 이상)

        Returns:
            수정된 문서
        """
        table, not_found = ENTITY_TABLES[resolve_kind(kind)]
        stock = require_stock(stock)

        updated = await self.storage.update(table, entity_id, {"inventory": stock})
        if updated is None:
            raise NotFoundError(not_found)

        global_metrics.increment("inventory.adjustments")
        logger.info(f"재고 설정: {table}/{entity_id} -> {stock}")
        return updated

    async def increase(self, product_id: str, amount: Any) -> Dict[str, Any]:
        """상품 재고 증가"""
        return await self._adjust(product_id, require_amount(amount))

    async def decrease(self, product_id: str, amount: Any) -> Dict[str, Any]:
        """상품 재고 차감 (재고 부족 시 InsufficientStockError, 재고는 변경되지 않음)"""
        return await self._adjust(product_id, -require_amount(amount))

    async def _adjust(self, product_id: str, delta: int) -> Dict[str, Any]:
        attempts = 0
        while True:
            product = await self.storage.get("products", product_id)
            if not product:
                raise NotFoundError("Product not found")

            current = product.get("inventory") or 0
            new_stock = current + delta
            if new_stock < 0:
                global_metrics.increment("inventory.rejected")
                logger.warning(f"재고 부족: {product_id} 요청={-delta} 현재={current}")
                raise InsufficientStockError(requested=-delta, available=current)

            try:
                updated = await self.storage.update(
                    "products",
                    product_id,
                    {"inventory": new_stock},
                    expected_version=product["version"],
                )
            except VersionConflictError:
                attempts += 1
                global_metrics.increment("inventory.conflicts")
                if attempts > self.max_retries:
                    logger.error(f"재고 갱신 충돌 재시도 초과: {product_id}")
                    raise
                logger.warning(f"재고 갱신 충돌, 재시도 {attempts}/{self.max_retries}: {product_id}")
                continue

            if updated is None:
                raise NotFoundError("Product not found")

            global_metrics.increment("inventory.adjustments")
            logger.info(f"재고 변경: {product_id} {current} -> {new_stock}")
            return updated

    async def set_record_stock(self, product_id: str, variant_key: str, stock: Any) -> Dict[str, Any]:
        """
        (상품, variantKey) 단위 재고 레코드 설정

        레코드가 없으면 생성하고 있으면 수량을 덮어쓴다.
        """
        stock = require_stock(stock)
        if not isinstance(variant_key, str) or not variant_key.strip():
            raise ValidationError("variantKey is required")
        variant_key = variant_key.strip()

        if not await self.storage.get("products", product_id):
            raise NotFoundError("Product not found")

        key = {"product": product_id, "variantKey": variant_key}
        existing = await self.storage.find_one("inventory", key)
        if existing is None:
            try:
                record = await self.storage.create("inventory", {**key, "stock": stock})
                logger.info(f"재고 레코드 생성: {product_id}/{variant_key} = {stock}")
                return record
            except DuplicateKeyError:
                # 동시에 생성된 경우 기존 레코드를 갱신
                existing = await self.storage.find_one("inventory", key)

        record = await self.storage.update("inventory", existing["id"], {"stock": stock})
        logger.info(f"재고 레코드 설정: {product_id}/{variant_key} = {stock}")
        return record

    async def list_records(self, product_id: str) -> List[Dict[str, Any]]:
        """상품의 재고 레코드 목록"""
        if not await self.storage.get("products", product_id):
            raise NotFoundError("Product not found")
        return await self.storage.find("inventory", {"product": product_id}, sort=["variantKey"])
