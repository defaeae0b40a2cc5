"""
카탈로그 관리 모듈
상품, 변형, 카테고리의 생성/수정/삭제
"""

from typing import Any, Dict

from catalog.domain.pricing import PricingEngine
from catalog.exceptions import NotFoundError, ValidationError
from catalog.models import (
    CatalogModel,
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductUpdate,
    VariantCreate,
    VariantUpdate,
)
from catalog.monitoring import get_logger
from catalog.storage.base import BaseStorage

logger = get_logger(__name__)

# null을 명시적으로 허용하는 필드
NULLABLE_FIELDS = {"description"}


def collect_changes(model: CatalogModel) -> Dict[str, Any]:
    """수정 요청에서 실제로 전달된 필드만 추출"""
    return {
        key: value
        for key, value in model.to_document(exclude_unset=True).items()
        if value is not None or key in NULLABLE_FIELDS
    }


class CatalogManager:
    """카탈로그 엔티티 관리자"""

    def __init__(self, storage: BaseStorage):
        self.storage = storage

    async def _resolve_category(self, value: str) -> str:
        """카테고리 ID 또는 이름을 ID로 변환"""
        category = await self.storage.get("categories", value)
        if not category:
            category = await self.storage.find_one("categories", {"name": value})
        if not category:
            raise ValidationError("Invalid category name provided")
        return category["id"]

    # 상품

    async def create_product(self, data: ProductCreate) -> Dict[str, Any]:
        document = data.to_document()
        document["category"] = await self._resolve_category(data.category)
        PricingEngine.annotate(document)

        product = await self.storage.create("products", document)
        logger.info(f"상품 생성됨: {product['id']}")
        return PricingEngine.annotate(product)

    async def update_product(self, product_id: str, data: ProductUpdate) -> Dict[str, Any]:
        changes = collect_changes(data)
        if "category" in changes:
            changes["category"] = await self._resolve_category(changes["category"])

        existing = await self.storage.get("products", product_id)
        if not existing:
            raise NotFoundError("Product not found")
        # 저장 전에 변경 후 가격 검증
        PricingEngine.annotate({**existing, **changes})

        updated = await self.storage.update("products", product_id, changes)
        if updated is None:
            raise NotFoundError("Product not found")

        logger.info(f"상품 수정됨: {product_id}")
        return PricingEngine.annotate(updated)

    async def delete_product(self, product_id: str) -> None:
        """상품 삭제 (변형은 함께 삭제되지 않음)"""
        if not await self.storage.delete("products", product_id):
            raise NotFoundError("Product not found")
        logger.info(f"상품 삭제됨: {product_id}")

    # 변형

    async def _require_product(self, product_id: str):
        if not await self.storage.get("products", product_id):
            raise ValidationError("Invalid product reference", details={"product": product_id})

    async def create_variant(self, data: VariantCreate) -> Dict[str, Any]:
        await self._require_product(data.product)

        document = data.to_document()
        PricingEngine.annotate(document)

        variant = await self.storage.create("variants", document)
        logger.info(f"변형 생성됨: {variant['id']} (상품 {variant['product']})")
        return PricingEngine.annotate(variant)

    async def update_variant(self, variant_id: str, data: VariantUpdate) -> Dict[str, Any]:
        existing = await self.storage.get("variants", variant_id)
        if not existing:
            raise NotFoundError("Variant not found")

        changes = collect_changes(data)
        if "product" in changes:
            await self._require_product(changes["product"])
        if "attributes" in changes:
            changes["attributes"] = {**(existing.get("attributes") or {}), **changes["attributes"]}
        PricingEngine.annotate({**existing, **changes})

        updated = await self.storage.update("variants", variant_id, changes)
        if updated is None:
            raise NotFoundError("Variant not found")

        logger.info(f"변형 수정됨: {variant_id}")
        return PricingEngine.annotate(updated)

    async def delete_variant(self, variant_id: str) -> None:
        if not await self.storage.delete("variants", variant_id):
            raise NotFoundError("Variant not found")
        logger.info(f"변형 삭제됨: {variant_id}")

    # 카테고리

    async def create_category(self, data: CategoryCreate) -> Dict[str, Any]:
        category = await self.storage.create("categories", data.to_document())
        logger.info(f"카테고리 생성됨: {category['name']}")
        return category

    async def update_category(self, category_id: str, data: CategoryUpdate) -> Dict[str, Any]:
        updated = await self.storage.update("categories", category_id, collect_changes(data))
        if updated is None:
            raise NotFoundError("Category not found")
        logger.info(f"카테고리 수정됨: {category_id}")
        return updated

    async def delete_category(self, category_id: str) -> None:
        """카테고리 삭제 (소속 상품은 유지되며 참조가 끊긴다)"""
        if not await self.storage.delete("categories", category_id):
            raise NotFoundError("Category not found")
        logger.info(f"카테고리 삭제됨: {category_id}")
