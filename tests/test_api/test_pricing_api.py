"""
가격 API 테스트
"""


class TestPricing:
    """/api/pricing/product/{id}"""

    def test_update_discount(self, client, admin_headers, seeded):
        product_id = seeded["shirt"]["id"]

        response = client.patch(
            f"/api/pricing/product/{product_id}",
            json={"discount": 20, "discountType": "percentage"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["finalPrice"] == 20.0

        detail = client.get(f"/api/pricing/product/{product_id}").json()["data"]
        assert detail["discount"] == 20
        assert detail["finalPrice"] == 20.0

    def test_fixed_discount_floors_at_zero(self, client, admin_headers, seeded):
        response = client.patch(
            f"/api/pricing/product/{seeded['mug']['id']}",
            json={"discount": 60, "discountType": "fixed"},
            headers=admin_headers,
        )

        assert response.json()["data"]["finalPrice"] == 0

    def test_invalid_values(self, client, admin_headers, seeded):
        url = f"/api/pricing/product/{seeded['mug']['id']}"

        for payload in ({"price": -1}, {"discount": -5}, {"discountType": "bogo"}):
            response = client.patch(url, json=payload, headers=admin_headers)
            assert response.status_code == 400, payload

        assert client.get(url).json()["data"]["price"] == 12.0

    def test_missing_product(self, client, admin_headers, seeded):
        response = client.patch("/api/pricing/product/nope", json={"price": 5}, headers=admin_headers)

        assert response.status_code == 404

    def test_requires_admin(self, client, user_headers, seeded):
        response = client.patch(
            f"/api/pricing/product/{seeded['mug']['id']}", json={"price": 5}, headers=user_headers
        )

        assert response.status_code == 403
