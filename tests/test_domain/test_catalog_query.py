"""
카탈로그 조회 계층 테스트
"""

import pytest

from catalog.domain.query import CatalogQuery, ProductFilters
from catalog.exceptions import NotFoundError, ValidationError
from catalog.storage.memory_storage import MemoryStorage


@pytest.fixture
def catalog():
    """테스트용 카탈로그 (생성 시각 고정)"""
    storage = MemoryStorage()
    return storage, CatalogQuery(storage, low_stock_threshold=5)


async def populate(storage):
    apparel = await storage.create("categories", {"name": "Apparel"})
    home = await storage.create("categories", {"name": "Home"})

    shirt = await storage.create(
        "products",
        {
            "name": "Classic T-Shirt",
            "category": apparel["id"],
            "price": 25.0,
            "discount": 10,
            "discountType": "percentage",
            "inventory": 40,
            "createdAt": "2024-01-01T00:00:00+00:00",
        },
    )
    jacket = await storage.create(
        "products",
        {
            "name": "Denim Jacket",
            "category": apparel["id"],
            "price": 80.0,
            "discount": 15,
            "discountType": "fixed",
            "inventory": 3,
            "createdAt": "2024-01-02T00:00:00+00:00",
        },
    )
    mug = await storage.create(
        "products",
        {
            "name": "Ceramic Mug",
            "category": home["id"],
            "price": 12.0,
            "discount": 0,
            "inventory": 5,
            "createdAt": "2024-01-03T00:00:00+00:00",
        },
    )

    variants = [
        ("shirt-s", shirt, 25.0, 12, {"size": "S", "color": "black"}),
        ("shirt-m", shirt, 30.0, 0, {"size": "M", "color": "white"}),
        ("jacket-l", jacket, 80.0, 2, {"size": "L", "color": "blue"}),
    ]
    for index, (name, product, price, inventory, attributes) in enumerate(variants):
        await storage.create(
            "variants",
            {
                "product": product["id"],
                "variantName": name,
                "price": price,
                "discount": 0,
                "inventory": inventory,
                "attributes": attributes,
                "createdAt": f"2024-02-0{index + 1}T00:00:00+00:00",
            },
        )

    return {"apparel": apparel, "home": home, "shirt": shirt, "jacket": jacket, "mug": mug}


def names(products):
    return [p["name"] for p in products]


def variant_names(product):
    return [v["variantName"] for v in product["variants"]]


class TestListProducts:
    """상품 목록 조회 테스트"""

    @pytest.mark.asyncio
    async def test_lists_all_with_final_price(self, catalog):
        storage, query = catalog
        await populate(storage)

        products = await query.list_products(ProductFilters())

        assert len(products) == 3
        by_name = {p["name"]: p for p in products}
        assert by_name["Classic T-Shirt"]["finalPrice"] == 22.5
        assert by_name["Denim Jacket"]["finalPrice"] == 65.0
        assert by_name["Ceramic Mug"]["finalPrice"] == 12.0
        assert variant_names(by_name["Classic T-Shirt"]) == ["shirt-s", "shirt-m"]
        assert by_name["Classic T-Shirt"]["variants"][0]["finalPrice"] == 25.0

    @pytest.mark.asyncio
    async def test_category_is_populated(self, catalog):
        storage, query = catalog
        data = await populate(storage)

        products = await query.list_products(ProductFilters(category="Apparel"))

        assert sorted(names(products)) == ["Classic T-Shirt", "Denim Jacket"]
        assert all(p["category"]["id"] == data["apparel"]["id"] for p in products)
        assert all(p["category"]["name"] == "Apparel" for p in products)

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, catalog):
        storage, query = catalog
        await populate(storage)

        products = await query.list_products(ProductFilters(search="SHIRT"))

        assert names(products) == ["Classic T-Shirt"]

    @pytest.mark.asyncio
    async def test_unknown_category(self, catalog):
        storage, query = catalog
        await populate(storage)

        with pytest.raises(NotFoundError, match="Category not found"):
            await query.list_products(ProductFilters(category="Garden"))

    @pytest.mark.asyncio
    async def test_no_matches(self, catalog):
        storage, query = catalog
        await populate(storage)

        with pytest.raises(NotFoundError, match="No products found with given filters"):
            await query.list_products(ProductFilters(search="zzz"))

    @pytest.mark.asyncio
    async def test_empty_catalog(self, catalog):
        _, query = catalog

        with pytest.raises(NotFoundError):
            await query.list_products(ProductFilters())

    @pytest.mark.asyncio
    async def test_variant_filters_do_not_drop_products(self, catalog):
        """변형 조건은 변형 목록만 거른다"""
        storage, query = catalog
        await populate(storage)

        products = await query.list_products(ProductFilters(category="Apparel", size="M"))
        by_name = {p["name"]: p for p in products}

        assert len(products) == 2
        assert variant_names(by_name["Classic T-Shirt"]) == ["shirt-m"]
        assert by_name["Denim Jacket"]["variants"] == []

    @pytest.mark.asyncio
    async def test_in_stock_and_color(self, catalog):
        storage, query = catalog
        await populate(storage)

        in_stock = await query.list_products(ProductFilters(search="shirt", in_stock=True))
        assert variant_names(in_stock[0]) == ["shirt-s"]

        white = await query.list_products(ProductFilters(search="shirt", color="white"))
        assert variant_names(white[0]) == ["shirt-m"]

    @pytest.mark.asyncio
    async def test_price_range_applies_to_variants(self, catalog):
        storage, query = catalog
        await populate(storage)

        products = await query.list_products(ProductFilters(min_price=26, max_price=90))
        by_name = {p["name"]: p for p in products}

        assert variant_names(by_name["Classic T-Shirt"]) == ["shirt-m"]
        assert variant_names(by_name["Denim Jacket"]) == ["jacket-l"]
        assert by_name["Ceramic Mug"]["variants"] == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "sort,expected",
        [
            ("price_asc", ["Ceramic Mug", "Classic T-Shirt", "Denim Jacket"]),
            ("price_desc", ["Denim Jacket", "Classic T-Shirt", "Ceramic Mug"]),
            ("date_newest", ["Ceramic Mug", "Denim Jacket", "Classic T-Shirt"]),
            ("date_oldest", ["Classic T-Shirt", "Denim Jacket", "Ceramic Mug"]),
        ],
    )
    async def test_sorting(self, catalog, sort, expected):
        storage, query = catalog
        await populate(storage)

        products = await query.list_products(ProductFilters(sort=sort))

        assert names(products) == expected

    @pytest.mark.asyncio
    async def test_price_sort_uses_final_price(self, catalog):
        """할인 후 가격 기준 정렬"""
        storage, query = catalog
        await storage.create("products", {"name": "A", "price": 100.0, "discount": 90, "createdAt": "2024-01-01"})
        await storage.create("products", {"name": "B", "price": 20.0, "discount": 0, "createdAt": "2024-01-02"})

        products = await query.list_products(ProductFilters(sort="price_asc"))

        assert names(products) == ["A", "B"]

    @pytest.mark.asyncio
    async def test_invalid_sort(self, catalog):
        storage, query = catalog
        await populate(storage)

        with pytest.raises(ValidationError):
            await query.list_products(ProductFilters(sort="popularity"))

    @pytest.mark.asyncio
    async def test_deleted_category_is_none(self, catalog):
        storage, query = catalog
        data = await populate(storage)
        await storage.delete("categories", data["home"]["id"])

        products = await query.list_products(ProductFilters(search="mug"))

        assert products[0]["category"] is None


class TestProductDetail:
    @pytest.mark.asyncio
    async def test_get_product(self, catalog):
        storage, query = catalog
        data = await populate(storage)

        product = await query.get_product(data["jacket"]["id"])

        assert product["finalPrice"] == 65.0
        assert product["category"]["name"] == "Apparel"
        assert variant_names(product) == ["jacket-l"]

    @pytest.mark.asyncio
    async def test_get_missing_product(self, catalog):
        _, query = catalog

        with pytest.raises(NotFoundError, match="Product not found"):
            await query.get_product("missing")


class TestLowStock:
    """저재고 조회 테스트"""

    @pytest.mark.asyncio
    async def test_threshold_is_exclusive(self, catalog):
        storage, query = catalog
        await populate(storage)

        products = await query.get_low_stock("5")

        assert names(products) == ["Denim Jacket"]
        assert all(p["inventory"] < 5 for p in products)

    @pytest.mark.asyncio
    async def test_default_threshold_and_order(self, catalog):
        storage, query = catalog
        await populate(storage)
        query.low_stock_threshold = 6

        products = await query.get_low_stock()

        assert names(products) == ["Denim Jacket", "Ceramic Mug"]

    @pytest.mark.asyncio
    async def test_zero_threshold_returns_nothing(self, catalog):
        storage, query = catalog
        await populate(storage)

        assert await query.get_low_stock(0) == []

    @pytest.mark.asyncio
    async def test_variants(self, catalog):
        storage, query = catalog
        await populate(storage)

        variants = await query.get_low_stock(None, "variant")

        assert [v["variantName"] for v in variants] == ["shirt-m", "jacket-l"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("threshold", [-1, "-1", "many"])
    async def test_invalid_threshold(self, catalog, threshold):
        _, query = catalog

        with pytest.raises(ValidationError):
            await query.get_low_stock(threshold)


class TestListings:
    @pytest.mark.asyncio
    async def test_variant_listings(self, catalog):
        storage, query = catalog
        data = await populate(storage)

        assert len(await query.list_variants()) == 3
        shirt_variants = await query.list_variants_for_product(data["shirt"]["id"])
        assert [v["variantName"] for v in shirt_variants] == ["shirt-s", "shirt-m"]
        assert await query.list_variants_for_product("missing") == []

    @pytest.mark.asyncio
    async def test_categories(self, catalog):
        storage, query = catalog
        data = await populate(storage)

        assert [c["name"] for c in await query.list_categories()] == ["Apparel", "Home"]
        assert (await query.get_category(data["home"]["id"]))["name"] == "Home"
        with pytest.raises(NotFoundError):
            await query.get_category("missing")
