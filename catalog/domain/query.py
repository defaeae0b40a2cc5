"""
카탈로그 조회 모듈
요청 파라미터로 필터/정렬 조건을 만들고 상품과 변형을 조합해 반환한다
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from catalog.domain.inventory import ENTITY_TABLES, resolve_kind
from catalog.domain.pricing import PricingEngine
from catalog.domain.validator import is_number, parse_threshold
from catalog.exceptions import NotFoundError, ValidationError
from catalog.monitoring import get_logger, global_metrics, performance_tracker
from catalog.storage.base import BaseStorage

logger = get_logger(__name__)


class SortKey(str, Enum):
    """상품 목록 정렬 키"""

    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    DATE_NEWEST = "date_newest"
    DATE_OLDEST = "date_oldest"


@dataclass
class ProductFilters:
    """상품 목록 조회 조건"""

    search: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort: Optional[str] = None
    in_stock: bool = False
    size: Optional[str] = None
    color: Optional[str] = None


class CatalogQuery:
    """카탈로그 조회 계층"""

    def __init__(self, storage: BaseStorage, low_stock_threshold: int = 5):
        self.storage = storage
        self.pricing = PricingEngine(storage)
        self.low_stock_threshold = low_stock_threshold

    async def build_product_criteria(self, filters: ProductFilters) -> Dict[str, Any]:
        """
        상품 조회 조건 생성

        Raises:
            NotFoundError: 카테고리명이 존재하지 않음
        """
        criteria: Dict[str, Any] = {}

        if filters.search:
            criteria["name__icontains"] = filters.search
        if filters.category:
            category = await self.storage.find_one("categories", {"name": filters.category})
            if not category:
                raise NotFoundError("Category not found")
            criteria["category"] = category["id"]

        return criteria

    def build_variant_criteria(self, filters: ProductFilters, product_ids: List[str]) -> Dict[str, Any]:
        """
        변형 조회 조건 생성 (가격 범위는 변형 가격 기준)
        """
        criteria: Dict[str, Any] = {"product__in": product_ids}

        for name, value in (("minPrice", filters.min_price), ("maxPrice", filters.max_price)):
            if value is not None and not is_number(value):
                raise ValidationError(f"Invalid {name} value")

        if filters.min_price is not None:
            criteria["price__gte"] = filters.min_price
        if filters.max_price is not None:
            criteria["price__lte"] = filters.max_price
        if filters.in_stock:
            criteria["inventory__gt"] = 0
        if filters.size:
            criteria["attributes.size"] = filters.size
        if filters.color:
            criteria["attributes.color"] = filters.color

        return criteria

    @staticmethod
    def _resolve_sort(sort: Optional[str]) -> Optional[SortKey]:
        if not sort:
            return None
        try:
            return SortKey(sort)
        except ValueError:
            raise ValidationError(f"Invalid sort value: {sort}") from None

    async def _populate_categories(self, products: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """category ID를 카테고리 문서로 치환 (삭제된 카테고리는 None)"""
        ids = list({p.get("category") for p in products if p.get("category")})
        categories = await self.storage.find("categories", {"id__in": ids}) if ids else []
        by_id = {c["id"]: c for c in categories}
        return [{**p, "category": by_id.get(p.get("category"))} for p in products]

    async def list_products(self, filters: ProductFilters) -> List[Dict[str, Any]]:
        """
        필터 조건으로 상품 목록 조회

        각 상품에는 finalPrice와 조건에 맞는 변형 목록(variants)이 포함된다.

        Raises:
            NotFoundError: 카테고리 없음 또는 조건에 맞는 상품 없음
            ValidationError: 잘못된 정렬 키 또는 가격 범위
        """
        global_metrics.increment("catalog.queries")

        async with performance_tracker.track_async("list_products", "catalog.query_latency"):
            criteria = await self.build_product_criteria(filters)
            sort_key = self._resolve_sort(filters.sort)

            storage_sort = None
            if sort_key in (SortKey.DATE_OLDEST, SortKey.PRICE_ASC):
                storage_sort = ["createdAt"]
            elif sort_key in (SortKey.DATE_NEWEST, SortKey.PRICE_DESC):
                storage_sort = ["-createdAt"]

            products = await self.storage.find("products", criteria, sort=storage_sort)
            if not products:
                raise NotFoundError("No products found with given filters")

            product_ids = [p["id"] for p in products]
            variants = await self.storage.find(
                "variants", self.build_variant_criteria(filters, product_ids), sort=["createdAt"]
            )

            variants_by_product: Dict[str, List[Dict[str, Any]]] = {pid: [] for pid in product_ids}
            for variant in variants:
                variants_by_product[variant["product"]].append(self.pricing.annotate(variant))

            products = await self._populate_categories(products)
            result = [
                {**self.pricing.annotate(product), "variants": variants_by_product[product["id"]]}
                for product in products
            ]

            # 가격 정렬은 최종가 기준 (동일 가격은 생성 시각 순서 유지)
            if sort_key is SortKey.PRICE_ASC:
                result.sort(key=lambda p: p["finalPrice"])
            elif sort_key is SortKey.PRICE_DESC:
                result.sort(key=lambda p: p["finalPrice"], reverse=True)

        logger.debug(f"상품 목록 조회: {len(result)}건 criteria={criteria}")
        return result

    async def get_product(self, product_id: str) -> Dict[str, Any]:
        """
        상품 상세 조회 (카테고리, 전체 변형, 최종가 포함)
        """
        product = await self.storage.get("products", product_id)
        if not product:
            raise NotFoundError("Product not found")

        variants = await self.storage.find("variants", {"product": product_id}, sort=["createdAt"])
        (populated,) = await self._populate_categories([product])
        return {
            **self.pricing.annotate(populated),
            "variants": [self.pricing.annotate(v) for v in variants],
        }

    async def get_low_stock(self, threshold: Any = None, kind: Any = "product") -> List[Dict[str, Any]]:
        """
        재고가 기준값 미만인 상품 또는 변형 목록

        Args:
            threshold: 기준값 (미지정 시 설정 기본값, 경계값은 제외)
            kind: product 또는 variant

        Raises:
            ValidationError: 음수 또는 숫자가 아닌 기준값
        """
        threshold = parse_threshold(threshold, self.low_stock_threshold)
        table, _ = ENTITY_TABLES[resolve_kind(kind)]
        return await self.storage.find(table, {"inventory__lt": threshold}, sort=["inventory"])

    async def list_variants(self) -> List[Dict[str, Any]]:
        """전체 변형 목록 (최종가 포함)"""
        variants = await self.storage.find("variants", sort=["createdAt"])
        return [self.pricing.annotate(v) for v in variants]

    async def list_variants_for_product(self, product_id: str) -> List[Dict[str, Any]]:
        """상품의 변형 목록 (최종가 포함)"""
        variants = await self.storage.find("variants", {"product": product_id}, sort=["createdAt"])
        return [self.pricing.annotate(v) for v in variants]

    async def list_categories(self) -> List[Dict[str, Any]]:
        return await self.storage.find("categories", sort=["name"])

    async def get_category(self, category_id: str) -> Dict[str, Any]:
        category = await self.storage.get("categories", category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category
