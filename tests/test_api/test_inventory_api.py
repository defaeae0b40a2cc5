"""
재고 API 테스트
"""


class TestStockUpdates:
    """PATCH /api/inventory/{kind}/{id}/stock"""

    def test_set_product_stock(self, client, admin_headers, seeded):
        response = client.patch(
            f"/api/inventory/products/{seeded['mug']['id']}/stock", json={"stock": 0}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["inventory"] == 0

    def test_set_variant_stock(self, client, admin_headers, seeded):
        variant_id = seeded["variants"]["shirt_m"]["id"]

        response = client.patch(f"/api/inventory/variants/{variant_id}/stock", json={"stock": 8}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"]["inventory"] == 8

    def test_invalid_stock(self, client, admin_headers, seeded):
        url = f"/api/inventory/products/{seeded['mug']['id']}/stock"

        for payload in ({}, {"stock": -1}, {"stock": "5"}, {"stock": True}, {"stock": -0.5}):
            response = client.patch(url, json=payload, headers=admin_headers)
            assert response.status_code == 400, payload

    def test_fractional_stock(self, client, admin_headers, seeded):
        url = f"/api/inventory/products/{seeded['mug']['id']}/stock"

        response = client.patch(url, json={"stock": 2.5}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"]["inventory"] == 2.5
        assert client.patch(url, json={"stock": 4}, headers=admin_headers).json()["data"]["inventory"] == 4

    def test_missing_entities(self, client, admin_headers, seeded):
        product = client.patch("/api/inventory/products/nope/stock", json={"stock": 1}, headers=admin_headers)
        variant = client.patch("/api/inventory/variants/nope/stock", json={"stock": 1}, headers=admin_headers)

        assert product.status_code == 404
        assert product.json()["message"] == "Product not found"
        assert variant.status_code == 404
        assert variant.json()["message"] == "Variant not found"

    def test_user_forbidden(self, client, user_headers, seeded):
        response = client.patch(
            f"/api/inventory/products/{seeded['mug']['id']}/stock", json={"stock": 1}, headers=user_headers
        )

        assert response.status_code == 403


class TestLowStock:
    """GET /api/inventory/{kind}/low-stock"""

    def test_products(self, client, admin_headers, seeded):
        response = client.get("/api/inventory/products/low-stock", params={"threshold": 5}, headers=admin_headers)

        body = response.json()
        assert body["count"] == 1
        assert all(p["inventory"] < 5 for p in body["data"])

    def test_variants(self, client, admin_headers, seeded):
        response = client.get("/api/inventory/variants/low-stock", headers=admin_headers)

        assert response.status_code == 200
        assert [v["variantName"] for v in response.json()["data"]] == ["T-Shirt M White", "Jacket L Blue"]

    def test_zero_threshold(self, client, admin_headers, seeded):
        response = client.get("/api/inventory/variants/low-stock", params={"threshold": 0}, headers=admin_headers)

        assert response.json()["count"] == 0

    def test_negative_threshold(self, client, admin_headers, seeded):
        response = client.get("/api/inventory/variants/low-stock", params={"threshold": -1}, headers=admin_headers)

        assert response.status_code == 400

    def test_anonymous(self, client, seeded):
        assert client.get("/api/inventory/products/low-stock").status_code == 401


class TestInventoryRecords:
    """(상품, variantKey) 재고 레코드"""

    def test_put_and_list(self, client, admin_headers, seeded):
        base = f"/api/inventory/products/{seeded['shirt']['id']}/records"

        first = client.put(f"{base}/M-white", json={"stock": 4}, headers=admin_headers)
        again = client.put(f"{base}/M-white", json={"stock": 9}, headers=admin_headers)
        client.put(f"{base}/L-black", json={"stock": 1}, headers=admin_headers)

        assert first.status_code == 200
        assert again.json()["data"]["id"] == first.json()["data"]["id"]

        listing = client.get(base, headers=admin_headers).json()
        assert listing["results"] == 2
        assert [(r["variantKey"], r["stock"]) for r in listing["data"]] == [("L-black", 1), ("M-white", 9)]

    def test_unknown_product(self, client, admin_headers, seeded):
        response = client.put("/api/inventory/products/nope/records/S", json={"stock": 1}, headers=admin_headers)

        assert response.status_code == 404
