"""
Integration tests for Nutrition API endpoints.

Tests cover:
- Barcode lookup (remote fetch, cached, refresh, not found, upstream down)
- Food search merging and validation
"""
import pytest

from tests.fakes import off_product


BARCODE = "3017620422003"


@pytest.mark.integration
class TestBarcodeEndpoint:
    def test_lookup_from_open_food_facts(self, client, fake_repos):
        fake_repos["off_client"].products[BARCODE] = off_product(BARCODE)

        response = client.get(f"/nutrition/barcode/{BARCODE}")

        assert response.status_code == 200
        item = response.json()
        assert item["barcode"] == BARCODE
        assert item["name"] == "Hazelnut Spread"
        assert item["serving_size_g"] == 15.0
        assert item["calories_per_serving"] == 80.85
        assert len(fake_repos["food_repo"].items) == 1

    def test_second_lookup_uses_store(self, client, fake_repos):
        off_client = fake_repos["off_client"]
        off_client.products[BARCODE] = off_product(BARCODE)

        client.get(f"/nutrition/barcode/{BARCODE}")
        client.get(f"/nutrition/barcode/{BARCODE}")

        assert off_client.lookups == [BARCODE]

    def test_refresh_refetches(self, client, fake_repos):
        off_client = fake_repos["off_client"]
        off_client.products[BARCODE] = off_product(BARCODE)
        client.get(f"/nutrition/barcode/{BARCODE}")
        off_client.products[BARCODE] = off_product(BARCODE, name="Hazelnut Spread Light")

        response = client.get(f"/nutrition/barcode/{BARCODE}", params={"refresh": True})

        assert response.json()["name"] == "Hazelnut Spread Light"
        assert len(fake_repos["food_repo"].items) == 1

    def test_unknown_barcode(self, client):
        response = client.get("/nutrition/barcode/0000000000000")

        assert response.status_code == 404
        assert response.json() == {"detail": "Product not found"}

    def test_upstream_unavailable(self, client, fake_repos):
        fake_repos["off_client"].unavailable = True

        response = client.get(f"/nutrition/barcode/{BARCODE}")

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to look up product"}


@pytest.mark.integration
class TestSearchEndpoint:
    def test_search_merges_local_and_remote(self, client, fake_repos):
        fake_repos["food_repo"].seed([{
            "barcode": "111",
            "name": "Oat Milk",
            "brand": "Acme",
            "calories_per_serving": 120.0,
        }])
        fake_repos["off_client"].search_results = [
            off_product("111", name="Oat Milk"),
            off_product("222", name="Rolled Oats"),
        ]

        response = client.get("/nutrition/search", params={"q": "oat"})

        assert response.status_code == 200
        assert [item["barcode"] for item in response.json()] == ["111", "222"]

    def test_search_survives_remote_failure(self, client, fake_repos):
        fake_repos["food_repo"].seed([{"name": "Oat Milk", "calories_per_serving": 120.0}])
        fake_repos["off_client"].unavailable = True

        response = client.get("/nutrition/search", params={"q": "oat"})

        assert response.status_code == 200
        assert [item["name"] for item in response.json()] == ["Oat Milk"]

    @pytest.mark.parametrize("params", [{}, {"q": "o"}])
    def test_query_too_short(self, client, params):
        response = client.get("/nutrition/search", params=params)

        assert response.status_code == 400
        assert response.json()["detail"] == "Query must be at least 2 characters"


@pytest.mark.integration
class TestNutritionAuth:
    def test_requires_authentication(self, unauthenticated_client):
        assert unauthenticated_client.get("/nutrition/search?q=oat").status_code == 401
